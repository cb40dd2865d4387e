"""Health check endpoints."""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from tourcalc.api.deps import get_trip_repository
from tourcalc.db.repositories import TripStore

logger = logging.getLogger(__name__)

router = APIRouter()


def check_store(repository: TripStore) -> tuple[bool, str]:
    """Check that the trip store can be read.

    Returns:
        (is_ok, status_message)
    """
    try:
        repository.list_trips()
        return (True, "ok")
    except Exception as e:
        logger.warning(f"Trip store health check failed: {e}")
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple liveness check.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
def healthz(
    repository: Annotated[TripStore, Depends(get_trip_repository)],
) -> dict[str, Any] | Response:
    """Readiness check.

    Returns:
        200 with component status if the trip store is readable
        503 otherwise
    """
    store_ok, store_status = check_store(repository)

    response_body = {
        "status": "ok" if store_ok else "degraded",
        "components": {"store": store_status},
    }

    if not store_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
