"""Saved trip endpoints - listing, deletion and backup export/import."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from tourcalc.api.deps import get_trip_repository
from tourcalc.db.backup import export_backup, import_backup
from tourcalc.db.repositories import TripStore
from tourcalc.errors import TripNotFoundError
from tourcalc.models.trip import SavedTrip
from tourcalc.utils.logging import trip_logger

router = APIRouter(prefix="/trips", tags=["trips"])

StoreDep = Annotated[TripStore, Depends(get_trip_repository)]

BACKUP_FILENAME = "tourcalc_backup.json"


@router.get("", response_model=list[SavedTrip])
def list_trips(repository: StoreDep) -> list[SavedTrip]:
    """List saved trips, newest first."""
    return repository.list_trips()


# Declared before /{trip_id} so "backup" is not taken for an id
@router.get("/backup")
def download_backup(repository: StoreDep) -> Response:
    """All saved trips as one JSON document."""
    return Response(
        content=export_backup(repository.list_trips()),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{BACKUP_FILENAME}"'},
    )


@router.post("/backup", response_model=list[SavedTrip])
async def upload_backup(
    request: Request,
    repository: StoreDep,
    overwrite: Annotated[bool, Query(description="Replace all saved trips")] = False,
) -> list[SavedTrip]:
    """Import a backup document.

    Without overwrite, imported trips are merged in and an already stored
    trip keeps its data when the ids clash. An invalid document leaves the
    store untouched.
    """
    raw = await request.body()
    trips = import_backup(repository, raw, overwrite=overwrite)
    trip_logger.log_persistence("import_backup", "ok")
    return trips


@router.get("/{trip_id}", response_model=SavedTrip)
def get_trip(trip_id: str, repository: StoreDep) -> SavedTrip:
    trip = repository.get_trip(trip_id)
    if trip is None:
        raise TripNotFoundError(f"Saved trip {trip_id} not found")
    return trip


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: str, repository: StoreDep) -> Response:
    if not repository.delete_trip(trip_id):
        raise TripNotFoundError(f"Saved trip {trip_id} not found")
    trip_logger.log_persistence("delete", "ok", trip_id=trip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
