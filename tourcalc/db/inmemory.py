"""In-memory implementations of repository interfaces."""

from tourcalc.db.repositories import newest_first
from tourcalc.models.trip import SavedTrip, TripParameters


class InMemoryTripRepository:
    """In-memory implementation of TripRepository and AutosaveStore."""

    def __init__(self) -> None:
        self._trips: dict[str, SavedTrip] = {}
        self._autosave: TripParameters | None = None

    def list_trips(self) -> list[SavedTrip]:
        """List saved trips, newest first."""
        return newest_first([trip.model_copy(deep=True) for trip in self._trips.values()])

    def get_trip(self, trip_id: str) -> SavedTrip | None:
        """Get saved trip by ID."""
        trip = self._trips.get(trip_id)
        return trip.model_copy(deep=True) if trip is not None else None

    def save_trip(self, trip: SavedTrip) -> SavedTrip:
        """Insert or replace a saved trip."""
        self._trips[trip.id] = trip.model_copy(deep=True)
        return trip

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a saved trip."""
        return self._trips.pop(trip_id, None) is not None

    def replace_all(self, trips: list[SavedTrip]) -> None:
        """Replace every saved trip."""
        self._trips = {trip.id: trip.model_copy(deep=True) for trip in trips}

    def save_autosave(self, params: TripParameters) -> None:
        """Overwrite the autosave slot."""
        self._autosave = params.model_copy(deep=True)

    def load_autosave(self) -> TripParameters | None:
        """Read the autosave slot."""
        return self._autosave.model_copy(deep=True) if self._autosave is not None else None
