"""FastAPI application for the tour pricing calculator."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tourcalc.api.deps import get_trip_repository, get_trip_session
from tourcalc.api.routes.advisory import router as advisory_router
from tourcalc.api.routes.export import router as export_router
from tourcalc.api.routes.health import router as health_router
from tourcalc.api.routes.metrics import router as metrics_router
from tourcalc.api.routes.pricing import router as pricing_router
from tourcalc.api.routes.session import router as session_router
from tourcalc.api.routes.trips import router as trips_router
from tourcalc.autosave import AutosaveScheduler
from tourcalc.config import get_settings
from tourcalc.errors import (
    HotelStayError,
    SnapshotRejectedError,
    TripAlreadyCoveredError,
    TripNotFoundError,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    scheduler: AutosaveScheduler | None = None

    if settings.autosave_enabled:
        scheduler = AutosaveScheduler(
            snapshot_provider=lambda: get_trip_session().params,
            store=get_trip_repository(),
            interval_seconds=settings.autosave_interval_seconds,
        )
        scheduler.start()

    yield

    if scheduler is not None:
        await scheduler.stop()
        # Keep the last edits made since the previous tick
        await scheduler.run_once()


app = FastAPI(title="TourCalc API", version=VERSION, lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(pricing_router)
app.include_router(session_router)
app.include_router(trips_router)
app.include_router(export_router)
app.include_router(advisory_router)


@app.exception_handler(SnapshotRejectedError)
async def snapshot_rejected_handler(request: Request, exc: SnapshotRejectedError) -> JSONResponse:
    logger.warning(f"Rejected snapshot on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "problems": exc.problems},
    )


@app.exception_handler(HotelStayError)
async def hotel_stay_handler(request: Request, exc: HotelStayError) -> JSONResponse:
    code = (
        status.HTTP_409_CONFLICT
        if isinstance(exc, TripAlreadyCoveredError)
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@app.exception_handler(TripNotFoundError)
async def trip_not_found_handler(request: Request, exc: TripNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "TourCalc API", "version": VERSION}
