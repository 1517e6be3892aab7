"""
FastAPI application exposing the parcel placement engine.

This module provides a small, well-documented API surface built on top of the
placement engine in parcel_packer.

Endpoints:
- GET /health
- GET / (service info / version)
- GET /parcel-types -> built-in parcel presets
- POST /arrange     -> place the requested parcels inside one container

Notes:
- The API uses the Pydantic request/response models defined in `parcel_packer.models`.
- The computational core remains pure-Python and uses dataclasses (in
  `parcel_packer.models`) and the algorithm implementation in `parcel_packer.packing`.
- Every call without a `seed` shuffles afresh, so repeating a request is the
  way to explore alternative layouts.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__ as PACKAGE_VERSION
from . import packing as packing_core
from .catalog import PRESET_PARCEL_TYPES, expand_demand
from .config import get_settings
from .exceptions import PackingError, TooManyItemsError
from .models import (
    ArrangeRequest,
    ArrangeResponse,
    ParcelTypeRead,
    arrange_response_from_result,
    containercreate_to_dataclass,
    parceltype_from_dataclass,
    parceltypecreate_to_dataclass,
)

settings = get_settings()

logger = logging.getLogger("parcel_packer")
logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="parcel_packer - container parcel arrangement",
    version=PACKAGE_VERSION,
    description="API wrapper around the anchor-point 3D parcel placement engine.",
)

# Allow cross-origin calls for common dev scenarios (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Health & info endpoints
# ---------------------------


@app.get("/", summary="Service info")
async def root() -> Dict[str, Any]:
    """
    Basic service information and version.
    """
    return {"service": "parcel_packer", "version": PACKAGE_VERSION}


@app.get("/health", summary="Health check")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get(
    "/parcel-types",
    response_model=List[ParcelTypeRead],
    summary="Built-in parcel presets",
)
async def parcel_types() -> List[ParcelTypeRead]:
    return [parceltype_from_dataclass(pt) for pt in PRESET_PARCEL_TYPES]


# ---------------------------
# Arrangement endpoint
# ---------------------------


@app.post(
    "/arrange",
    response_model=ArrangeResponse,
    summary="Arrange the requested parcels inside a container",
)
def arrange_parcels(request: ArrangeRequest) -> ArrangeResponse:
    """
    Arrangement endpoint.

    Request:
    - container: width/height/depth of the container (defaults to 4 x 2.5 x 2.5).
    - parcel_types: catalog of parcel types; the built-in presets when omitted.
    - demand: quantity per parcel type id. Unknown ids are ignored.
    - seed: optional shuffle seed for a reproducible layout.

    Response:
    - ArrangeResponse: placed parcels (center positions), unplaced counts by
      size, the per-type summary, utilization and the "not enough space"
      message when something was left out.
    """
    container = containercreate_to_dataclass(request.container)
    if request.parcel_types is None:
        catalog = list(PRESET_PARCEL_TYPES)
    else:
        catalog = [parceltypecreate_to_dataclass(pt) for pt in request.parcel_types]
    items = expand_demand(catalog, request.demand, max_items=settings.max_items)

    logger.info(
        "arrange called: %d parcels, %d parcel types, container=%sx%sx%s, seed=%s",
        len(items),
        len(catalog),
        container.width,
        container.height,
        container.depth,
        request.seed,
    )

    # CPU-bound and synchronous; FastAPI runs plain `def` handlers in its threadpool
    result = packing_core.arrange(
        container, items, rng=request.seed, max_items=settings.max_items
    )
    if result.unplaced:
        logger.info("%d parcels could not be arranged", len(result.unplaced))

    return arrange_response_from_result(
        container, result, message=packing_core.format_unplaced_message(result)
    )


# ---------------------------
# Exception handlers & utilities
# ---------------------------


@app.exception_handler(TooManyItemsError)
async def too_many_items_handler(request: Request, exc: TooManyItemsError):
    logger.warning("rejected arrangement: %s", exc)
    return JSONResponse(status_code=413, content={"detail": str(exc)})


@app.exception_handler(PackingError)
async def packing_error_handler(request: Request, exc: PackingError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    # Basic generic handler to ensure JSON responses for unexpected errors.
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
