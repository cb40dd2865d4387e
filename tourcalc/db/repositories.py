"""Repository protocol interfaces for saved trips."""

from typing import Protocol

from tourcalc.models.trip import SavedTrip, TripParameters


class TripRepository(Protocol):
    """Repository for named trip snapshots."""

    def list_trips(self) -> list[SavedTrip]:
        """List saved trips, newest first.

        Returns:
            Saved trips ordered by date descending
        """
        ...

    def get_trip(self, trip_id: str) -> SavedTrip | None:
        """Get a saved trip by ID.

        Args:
            trip_id: Saved trip ID

        Returns:
            Saved trip or None if not found
        """
        ...

    def save_trip(self, trip: SavedTrip) -> SavedTrip:
        """Insert or replace a saved trip.

        Args:
            trip: Trip to store (its id is kept)

        Returns:
            The stored trip
        """
        ...

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a saved trip.

        Args:
            trip_id: Saved trip ID

        Returns:
            True if a trip was deleted, False if it did not exist
        """
        ...

    def replace_all(self, trips: list[SavedTrip]) -> None:
        """Replace every saved trip (backup import).

        Args:
            trips: Complete new set of saved trips
        """
        ...


class AutosaveStore(Protocol):
    """Slot holding the most recent automatically saved snapshot."""

    def save_autosave(self, params: TripParameters) -> None:
        """Overwrite the autosave slot.

        Args:
            params: Current snapshot
        """
        ...

    def load_autosave(self) -> TripParameters | None:
        """Read the autosave slot.

        Returns:
            Last autosaved snapshot or None if nothing was saved
        """
        ...


class TripStore(TripRepository, AutosaveStore, Protocol):
    """A repository that also holds the autosave slot."""


def newest_first(trips: list[SavedTrip]) -> list[SavedTrip]:
    """Order trips by date descending."""
    return sorted(trips, key=lambda trip: trip.date, reverse=True)
