"""Backup export/import of all saved trips as one JSON document."""

import json
import logging

from tourcalc.db.repositories import TripRepository
from tourcalc.db.snapshots import dump_saved_trip, load_saved_trip
from tourcalc.errors import SnapshotRejectedError
from tourcalc.models.trip import SavedTrip

logger = logging.getLogger(__name__)

SOURCE = "backup"


def export_backup(trips: list[SavedTrip]) -> bytes:
    """Serialize saved trips to a pretty-printed JSON list."""
    return json.dumps([dump_saved_trip(trip) for trip in trips], indent=2).encode("utf-8")


def parse_backup(raw: str | bytes) -> list[SavedTrip]:
    """Decode and validate a backup document.

    Raises:
        SnapshotRejectedError: If the document is not a JSON list of valid
            saved trips; nothing is returned for a partially valid backup
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotRejectedError("Backup is not valid JSON", problems=[str(e)]) from e

    if not isinstance(data, list):
        raise SnapshotRejectedError("Backup must contain a list of saved trips")

    return [load_saved_trip(record, source=SOURCE) for record in data]


def merge_backup(
    imported: list[SavedTrip], existing: list[SavedTrip], overwrite: bool
) -> list[SavedTrip]:
    """Combine imported trips with the ones already stored.

    With overwrite the import replaces everything. Otherwise imported trips
    come first and, on an id clash, the already stored trip wins. Either way
    the result holds each id once; a repeated id inside the backup keeps its
    first position and its last record.
    """
    candidates = imported if overwrite else [*imported, *existing]

    # dict keeps the first position of an id and the last value assigned to it
    merged: dict[str, SavedTrip] = {}
    for trip in candidates:
        merged[trip.id] = trip
    return list(merged.values())


def import_backup(repository: TripRepository, raw: str | bytes, overwrite: bool) -> list[SavedTrip]:
    """Validate a backup and write the merged result to the repository.

    The repository is untouched when validation fails.

    Returns:
        The trips now stored
    """
    imported = parse_backup(raw)
    merged = merge_backup(imported, repository.list_trips(), overwrite)
    repository.replace_all(merged)
    logger.info(
        f"Imported {len(imported)} trips from backup "
        f"({'overwrite' if overwrite else 'merge'}), {len(merged)} stored"
    )
    return merged
