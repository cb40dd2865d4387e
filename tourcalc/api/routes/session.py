"""Current-trip endpoints - edits, reshaping, save/load and autosave restore.

Handlers are async so edits to the shared TripSession run one at a time on
the event loop and each response reflects a complete snapshot.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from tourcalc.api.deps import get_trip_repository, get_trip_session
from tourcalc.api.schemas import (
    AddHotelStayRequest,
    SaveTripRequest,
    SetDurationRequest,
    SetExtraDaysRequest,
    SnapshotResponse,
)
from tourcalc.db.repositories import TripStore
from tourcalc.db.snapshots import dump_params, load_params
from tourcalc.errors import TripNotFoundError
from tourcalc.models.trip import SavedTrip, TripParameters, default_trip_parameters
from tourcalc.session import TripSession
from tourcalc.utils.logging import trip_logger

router = APIRouter(prefix="/session", tags=["session"])

SessionDep = Annotated[TripSession, Depends(get_trip_session)]
StoreDep = Annotated[TripStore, Depends(get_trip_repository)]


@router.get("", response_model=SnapshotResponse)
async def get_current(session: SessionDep) -> SnapshotResponse:
    """Current snapshot with its breakdown."""
    return SnapshotResponse.from_session(session)


@router.put("", response_model=SnapshotResponse)
async def replace_current(
    session: SessionDep, data: dict[str, Any] = Body(...)
) -> SnapshotResponse:
    """Replace the snapshot with a complete imported one (fails closed)."""
    session.replace(load_params(data, source="api"), edit="import")
    return SnapshotResponse.from_session(session)


@router.patch("", response_model=SnapshotResponse)
async def patch_current(
    session: SessionDep, changes: dict[str, Any] = Body(...)
) -> SnapshotResponse:
    """Apply field edits given in camelCase.

    Changing a day-count field here without resizing its vectors is refused;
    use the duration and extra-days endpoints for that.
    """
    data = {**dump_params(session.params), **changes}
    session.replace(load_params(data, source="api"), edit="update")
    return SnapshotResponse.from_session(session)


@router.post("/reset", response_model=SnapshotResponse)
async def reset_current(session: SessionDep) -> SnapshotResponse:
    """Start over from the default trip."""
    session.replace(default_trip_parameters(), edit="reset")
    return SnapshotResponse.from_session(session)


@router.post("/duration", response_model=SnapshotResponse)
async def set_duration(request: SetDurationRequest, session: SessionDep) -> SnapshotResponse:
    session.set_duration(request.days)
    return SnapshotResponse.from_session(session)


@router.post("/extra-days", response_model=SnapshotResponse)
async def set_extra_days(request: SetExtraDaysRequest, session: SessionDep) -> SnapshotResponse:
    session.set_extra_days(request.role, request.side, request.count)
    return SnapshotResponse.from_session(session)


@router.post("/hotel-stays", response_model=SnapshotResponse)
async def add_hotel_stay(request: AddHotelStayRequest, session: SessionDep) -> SnapshotResponse:
    session.add_hotel_stay(request.name, request.cost_per_night)
    return SnapshotResponse.from_session(session)


@router.delete("/hotel-stays/{stay_id}", response_model=SnapshotResponse)
async def remove_hotel_stay(stay_id: str, session: SessionDep) -> SnapshotResponse:
    session.remove_hotel_stay(stay_id)
    return SnapshotResponse.from_session(session)


@router.post("/save", response_model=SavedTrip, status_code=status.HTTP_201_CREATED)
async def save_current(
    session: SessionDep, repository: StoreDep, request: SaveTripRequest | None = None
) -> SavedTrip:
    """Store the current snapshot as a new saved trip."""
    trip = repository.save_trip(session.to_saved_trip(request.name if request else None))
    trip_logger.log_persistence("save", "ok", trip_id=trip.id)
    return trip


@router.post("/load/{trip_id}", response_model=SnapshotResponse)
async def load_saved(trip_id: str, session: SessionDep, repository: StoreDep) -> SnapshotResponse:
    """Make a saved trip the current snapshot."""
    trip = repository.get_trip(trip_id)
    if trip is None:
        raise TripNotFoundError(f"Saved trip {trip_id} not found")
    session.load(trip)
    trip_logger.log_persistence("load", "ok", trip_id=trip_id)
    return SnapshotResponse.from_session(session)


@router.get("/autosave", response_model=TripParameters)
async def get_autosave(repository: StoreDep) -> TripParameters:
    """Last autosaved snapshot, so the operator can decide whether to restore it."""
    params = repository.load_autosave()
    if params is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No autosave found")
    return params


@router.post("/restore-autosave", response_model=SnapshotResponse)
async def restore_autosave(session: SessionDep, repository: StoreDep) -> SnapshotResponse:
    """Make the autosaved snapshot the current one."""
    params = repository.load_autosave()
    if params is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No autosave found")
    session.replace(params, edit="restore_autosave")
    trip_logger.log_persistence("restore_autosave", "ok")
    return SnapshotResponse.from_session(session)
