"""JSON-file trip repository - local counterpart of the cloud store.

File layout:
    {"saves": [<SavedTrip>, ...], "autosave": <TripParameters> | null}

Records are validated through tourcalc.db.snapshots on every read, so a
corrupted or hand-edited file is refused rather than partially loaded.

Every read and every read-modify-write holds the repository lock; autosave
ticks run in a worker thread while API handlers run in the threadpool.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from tourcalc.db.repositories import newest_first
from tourcalc.db.snapshots import dump_params, dump_saved_trip, load_params, load_saved_trip
from tourcalc.errors import SnapshotRejectedError
from tourcalc.models.trip import SavedTrip, TripParameters

logger = logging.getLogger(__name__)

SOURCE = "local"


class LocalFileTripRepository:
    """TripRepository and AutosaveStore backed by one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {"saves": [], "autosave": None}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotRejectedError(f"Local store {self._path} is not valid JSON") from e
        if not isinstance(data, dict) or not isinstance(data.get("saves", []), list):
            raise SnapshotRejectedError(f"Local store {self._path} has an unexpected layout")
        return {"saves": data.get("saves", []), "autosave": data.get("autosave")}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp file per write, swapped in atomically
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            json.dump(data, tmp, indent=2)
        try:
            os.replace(tmp.name, self._path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def _load_trips(self) -> list[SavedTrip]:
        return [load_saved_trip(record, source=SOURCE) for record in self._read()["saves"]]

    def _store_trips(self, trips: list[SavedTrip]) -> None:
        data = self._read()
        data["saves"] = [dump_saved_trip(trip) for trip in newest_first(trips)]
        self._write(data)

    def list_trips(self) -> list[SavedTrip]:
        """List saved trips, newest first."""
        with self._lock:
            return newest_first(self._load_trips())

    def get_trip(self, trip_id: str) -> SavedTrip | None:
        """Get saved trip by ID."""
        with self._lock:
            trips = self._load_trips()
        for trip in trips:
            if trip.id == trip_id:
                return trip
        return None

    def save_trip(self, trip: SavedTrip) -> SavedTrip:
        """Insert or replace a saved trip."""
        with self._lock:
            trips = [existing for existing in self._load_trips() if existing.id != trip.id]
            trips.append(trip)
            self._store_trips(trips)
        logger.info(f"Saved trip {trip.id} to {self._path}")
        return trip

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a saved trip."""
        with self._lock:
            trips = self._load_trips()
            remaining = [trip for trip in trips if trip.id != trip_id]
            if len(remaining) == len(trips):
                return False
            self._store_trips(remaining)
        return True

    def replace_all(self, trips: list[SavedTrip]) -> None:
        """Replace every saved trip."""
        with self._lock:
            self._store_trips(trips)

    def save_autosave(self, params: TripParameters) -> None:
        """Overwrite the autosave slot."""
        with self._lock:
            data = self._read()
            data["autosave"] = dump_params(params)
            self._write(data)

    def load_autosave(self) -> TripParameters | None:
        """Read the autosave slot."""
        with self._lock:
            raw = self._read()["autosave"]
        if raw is None:
            return None
        return load_params(raw, source=SOURCE)
