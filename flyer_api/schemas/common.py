# flyer_api/schemas/common.py

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base Pydantic model for all HTTP API schemas.

    Common config:
    - camelCase on the wire, snake_case in Python (both accepted on input)
    - forbid extra fields so the frontend gets early feedback on mistakes
    - read straight from ORM rows
    - trim surrounding whitespace from strings
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MessageResponse(APIModel):
    """
    Minimal response for operations that return no entity (e.g. deletes).
    """

    message: str


class ErrorResponse(APIModel):
    """
    Standard error envelope for all endpoints.
    """

    message: str = Field(..., description="Human-readable explanation of the error.")
    errors: Optional[List[Any]] = Field(
        default=None,
        description="Field-level validation problems, when there are any.",
    )


__all__ = [
    "APIModel",
    "MessageResponse",
    "ErrorResponse",
]
