"""Tests for backup export, validation and merge."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from tourcalc.db.backup import export_backup, import_backup, merge_backup, parse_backup
from tourcalc.db.inmemory import InMemoryTripRepository
from tourcalc.db.snapshots import dump_saved_trip
from tourcalc.errors import SnapshotRejectedError
from tourcalc.models.trip import SavedTrip, TripParameters

BASE_DATE = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _trip(trip_id: str, name: str, params: TripParameters, offset_days: int = 0) -> SavedTrip:
    return SavedTrip(
        id=trip_id, name=name, date=BASE_DATE + timedelta(days=offset_days), params=params
    )


class TestMergeBackup:
    def test_overwrite_replaces_everything(self, default_params: TripParameters) -> None:
        imported = [_trip("a", "imported A", default_params)]
        existing = [_trip("b", "existing B", default_params)]

        assert merge_backup(imported, existing, overwrite=True) == imported

    def test_merge_puts_imported_first(self, default_params: TripParameters) -> None:
        imported = [_trip("a", "A", default_params)]
        existing = [_trip("b", "B", default_params), _trip("c", "C", default_params)]

        merged = merge_backup(imported, existing, overwrite=False)

        assert [trip.id for trip in merged] == ["a", "b", "c"]

    def test_existing_wins_on_id_clash(self, default_params: TripParameters) -> None:
        imported = [_trip("x", "imported X", default_params), _trip("a", "A", default_params)]
        existing = [_trip("b", "B", default_params), _trip("x", "stored X", default_params)]

        merged = merge_backup(imported, existing, overwrite=False)

        assert [trip.id for trip in merged] == ["x", "a", "b"]
        assert merged[0].name == "stored X"

    def test_overwrite_keeps_one_record_per_id(self, default_params: TripParameters) -> None:
        imported = [
            _trip("x", "first X", default_params),
            _trip("a", "A", default_params),
            _trip("x", "second X", default_params),
        ]

        merged = merge_backup(imported, [], overwrite=True)

        assert [trip.id for trip in merged] == ["x", "a"]
        assert merged[0].name == "second X"


class TestParseBackup:
    def test_export_then_parse(self, default_params: TripParameters) -> None:
        trips = [_trip("a", "A", default_params), _trip("b", "B", default_params, 1)]

        assert parse_backup(export_backup(trips)) == trips

    def test_not_a_list_is_rejected(self) -> None:
        with pytest.raises(SnapshotRejectedError, match="list"):
            parse_backup(b'{"saves": []}')

    def test_invalid_json_is_rejected(self) -> None:
        with pytest.raises(SnapshotRejectedError):
            parse_backup(b"[{")

    def test_one_bad_entry_rejects_whole_backup(self, default_params: TripParameters) -> None:
        good = dump_saved_trip(_trip("a", "A", default_params))
        bad = dump_saved_trip(_trip("b", "B", default_params))
        bad["params"]["vanDailyRentalCosts"] = []

        with pytest.raises(SnapshotRejectedError):
            parse_backup(json.dumps([good, bad]))


class TestImportBackup:
    def test_import_merges_into_repository(self, default_params: TripParameters) -> None:
        repository = InMemoryTripRepository()
        repository.save_trip(_trip("b", "B", default_params))

        stored = import_backup(
            repository, export_backup([_trip("a", "A", default_params, 2)]), overwrite=False
        )

        assert {trip.id for trip in stored} == {"a", "b"}
        assert [trip.id for trip in repository.list_trips()] == ["a", "b"]

    def test_import_overwrite(self, default_params: TripParameters) -> None:
        repository = InMemoryTripRepository()
        repository.save_trip(_trip("b", "B", default_params))

        import_backup(repository, export_backup([_trip("a", "A", default_params)]), overwrite=True)

        assert [trip.id for trip in repository.list_trips()] == ["a"]

    def test_invalid_backup_leaves_repository_untouched(
        self, default_params: TripParameters
    ) -> None:
        repository = InMemoryTripRepository()
        repository.save_trip(_trip("b", "B", default_params))

        with pytest.raises(SnapshotRejectedError):
            import_backup(repository, b"not json", overwrite=True)

        assert [trip.id for trip in repository.list_trips()] == ["b"]
