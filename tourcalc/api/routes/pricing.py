"""Stateless pricing endpoints - price a snapshot without touching the session."""

from typing import Any

from fastapi import APIRouter, Body

from tourcalc.api.schemas import SnapshotResponse
from tourcalc.db.snapshots import load_params
from tourcalc.models.trip import default_trip_parameters

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/breakdown", response_model=SnapshotResponse)
def price_snapshot(data: dict[str, Any] = Body(...)) -> SnapshotResponse:
    """Validate a complete snapshot and return its cost breakdown.

    The snapshot must satisfy the per-day vector length rules; an
    inconsistent one is rejected with 422 rather than reshaped.
    """
    return SnapshotResponse.from_params(load_params(data, source="api"))


@router.get("/default", response_model=SnapshotResponse)
def default_snapshot() -> SnapshotResponse:
    """Default trip parameters together with their breakdown."""
    return SnapshotResponse.from_params(default_trip_parameters())
