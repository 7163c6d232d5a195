"""
flyer_api
---------

HTTP backend for business products and marketing flyers.

The ASGI application lives in ``flyer_api.main`` (``create_app()`` and the
module-level ``app``), suitable for uvicorn entrypoints like
``flyer_api.main:app``.
"""

from importlib import metadata as _metadata


# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

try:
    __version__: str = _metadata.version("flyer-backend")
except _metadata.PackageNotFoundError:  # When running from source tree
    __version__ = "0.0.0"


__all__ = ["__version__"]
