# flyer_api/routers/flyers.py

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from flyer_api.db.models import FlyerStatus
from flyer_api.routers.dependencies import get_current_identity, get_flyers_service
from flyer_api.schemas.common import ErrorResponse, MessageResponse
from flyer_api.schemas.flyers import FlyerCreate, FlyerRead, FlyerUpdate
from flyer_api.services import FlyersService, Identity

router = APIRouter(
    prefix="/flyers",
    tags=["flyers"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=List[FlyerRead],
    summary="List flyers",
    description="Return the caller's flyers, newest first, optionally filtered by status.",
)
def list_flyers(
    *,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
    status_filter: Optional[FlyerStatus] = Query(
        None,
        alias="status",
        description="Only return flyers in this status (draft, published, archived).",
    ),
) -> List[FlyerRead]:
    return service.list_flyers(identity, status=status_filter)


@router.post(
    "",
    response_model=FlyerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a flyer",
    description=(
        "Create a flyer. Each listed product the caller owns is copied into an "
        "embedded snapshot; ids that do not resolve are skipped."
    ),
)
def create_flyer(
    *,
    payload: FlyerCreate,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
) -> FlyerRead:
    return service.create_flyer(identity, payload)


@router.get("/{flyer_id}", response_model=FlyerRead, summary="Get a single flyer")
def get_flyer(
    *,
    flyer_id: str,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
) -> FlyerRead:
    return service.get_flyer(identity, flyer_id)


@router.put(
    "/{flyer_id}",
    response_model=FlyerRead,
    summary="Update a flyer",
    description=(
        "Patch the fields present in the body. Sending `products` re-snapshots "
        "the list from scratch; omitting it keeps the current snapshots."
    ),
)
def update_flyer(
    *,
    flyer_id: str,
    payload: FlyerUpdate,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
) -> FlyerRead:
    return service.update_flyer(identity, flyer_id, payload)


@router.delete("/{flyer_id}", response_model=MessageResponse, summary="Delete a flyer")
def delete_flyer(
    *,
    flyer_id: str,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
) -> MessageResponse:
    service.delete_flyer(identity, flyer_id)
    return MessageResponse(message="Flyer deleted successfully")


@router.post(
    "/{flyer_id}/duplicate",
    response_model=FlyerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate a flyer",
    description="Copy a flyer with its snapshots as-is; the copy's title ends in ' - Copy'.",
)
def duplicate_flyer(
    *,
    flyer_id: str,
    identity: Identity = Depends(get_current_identity),
    service: FlyersService = Depends(get_flyers_service),
) -> FlyerRead:
    return service.duplicate_flyer(identity, flyer_id)
