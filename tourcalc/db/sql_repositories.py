"""SQL implementation of the trip repository (cloud store)."""

from datetime import timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from tourcalc.db.models import AUTOSAVE_SLOT, AutosaveRow, SavedTripRow
from tourcalc.db.snapshots import dump_params, load_params, load_saved_trip
from tourcalc.models.trip import SavedTrip, TripParameters

SOURCE = "sql"


def _row_to_trip(row: SavedTripRow) -> SavedTrip:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; rows are written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return load_saved_trip(
        {"id": row.id, "name": row.name, "date": created_at, "params": row.trip_data},
        source=SOURCE,
    )


class SqlTripRepository:
    """SQL implementation of TripRepository and AutosaveStore."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def list_trips(self) -> list[SavedTrip]:
        """List saved trips, newest first."""
        with self._session_factory() as session:
            rows = session.scalars(
                select(SavedTripRow).order_by(SavedTripRow.created_at.desc())
            ).all()
            return [_row_to_trip(row) for row in rows]

    def get_trip(self, trip_id: str) -> SavedTrip | None:
        """Get saved trip by ID."""
        with self._session_factory() as session:
            row = session.get(SavedTripRow, trip_id)
            if row is None:
                return None
            return _row_to_trip(row)

    def save_trip(self, trip: SavedTrip) -> SavedTrip:
        """Insert or replace a saved trip."""
        with self._session_factory() as session:
            session.merge(
                SavedTripRow(
                    id=trip.id,
                    name=trip.name,
                    created_at=trip.date,
                    trip_data=dump_params(trip.params),
                )
            )
            session.commit()
        return trip

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a saved trip."""
        with self._session_factory() as session:
            result = session.execute(delete(SavedTripRow).where(SavedTripRow.id == trip_id))
            session.commit()
            return bool(result.rowcount)

    def replace_all(self, trips: list[SavedTrip]) -> None:
        """Replace every saved trip in one transaction."""
        with self._session_factory() as session:
            session.execute(delete(SavedTripRow))
            session.add_all(
                SavedTripRow(
                    id=trip.id,
                    name=trip.name,
                    created_at=trip.date,
                    trip_data=dump_params(trip.params),
                )
                for trip in trips
            )
            session.commit()

    def save_autosave(self, params: TripParameters) -> None:
        """Overwrite the autosave slot."""
        with self._session_factory() as session:
            session.merge(AutosaveRow(slot=AUTOSAVE_SLOT, trip_data=dump_params(params)))
            session.commit()

    def load_autosave(self) -> TripParameters | None:
        """Read the autosave slot."""
        with self._session_factory() as session:
            row = session.get(AutosaveRow, AUTOSAVE_SLOT)
            if row is None:
                return None
            return load_params(row.trip_data, source=SOURCE)
