"""Tests for the in-memory, local file and SQL trip stores."""

import json
import threading
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from tourcalc.config import Settings
from tourcalc.db.backup import export_backup, import_backup
from tourcalc.db.engine import create_engine_from_settings, create_session_factory, init_db
from tourcalc.db.inmemory import InMemoryTripRepository
from tourcalc.db.local_store import LocalFileTripRepository
from tourcalc.db.repositories import TripStore
from tourcalc.db.sql_repositories import SqlTripRepository
from tourcalc.errors import SnapshotRejectedError
from tourcalc.models.trip import SavedTrip, TripParameters
from tourcalc.pricing.reconciler import set_duration

BASE_DATE = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sql_repository() -> Iterator[SqlTripRepository]:
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_db(engine)
    yield SqlTripRepository(create_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "local", "sql"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> TripStore:
    if request.param == "memory":
        return InMemoryTripRepository()
    if request.param == "local":
        return LocalFileTripRepository(tmp_path / "saves.json")
    return request.getfixturevalue("sql_repository")


def _trip(trip_id: str, params: TripParameters, offset_days: int = 0) -> SavedTrip:
    return SavedTrip(
        id=trip_id,
        name=f"Trip {trip_id}",
        date=BASE_DATE + timedelta(days=offset_days),
        params=params,
    )


class TestTripStoreContract:
    def test_empty_store(self, store: TripStore) -> None:
        assert store.list_trips() == []
        assert store.get_trip("missing") is None
        assert store.load_autosave() is None

    def test_save_and_get(self, store: TripStore, default_params: TripParameters) -> None:
        trip = _trip("a", default_params)

        store.save_trip(trip)
        loaded = store.get_trip("a")

        assert loaded is not None
        assert loaded.name == "Trip a"
        assert loaded.date == BASE_DATE
        assert loaded.params == default_params

    def test_list_is_newest_first(self, store: TripStore, default_params: TripParameters) -> None:
        store.save_trip(_trip("old", default_params, 0))
        store.save_trip(_trip("new", default_params, 5))
        store.save_trip(_trip("mid", default_params, 2))

        assert [trip.id for trip in store.list_trips()] == ["new", "mid", "old"]

    def test_save_same_id_replaces(self, store: TripStore, default_params: TripParameters) -> None:
        store.save_trip(_trip("a", default_params))
        store.save_trip(_trip("a", set_duration(default_params, 3)))

        trips = store.list_trips()
        assert len(trips) == 1
        assert trips[0].params.duration_days == 3

    def test_delete(self, store: TripStore, default_params: TripParameters) -> None:
        store.save_trip(_trip("a", default_params))

        assert store.delete_trip("a") is True
        assert store.delete_trip("a") is False
        assert store.list_trips() == []

    def test_replace_all(self, store: TripStore, default_params: TripParameters) -> None:
        store.save_trip(_trip("a", default_params))

        store.replace_all([_trip("b", default_params), _trip("c", default_params, 1)])

        assert [trip.id for trip in store.list_trips()] == ["c", "b"]

    @pytest.mark.parametrize("overwrite", [True, False])
    def test_backup_with_repeated_id_imports(
        self, store: TripStore, default_params: TripParameters, overwrite: bool
    ) -> None:
        raw = export_backup(
            [_trip("x", default_params), _trip("x", default_params, 1), _trip("y", default_params)]
        )

        import_backup(store, raw, overwrite=overwrite)

        assert sorted(trip.id for trip in store.list_trips()) == ["x", "y"]
        stored = store.get_trip("x")
        assert stored is not None
        assert stored.date == BASE_DATE + timedelta(days=1)

    def test_autosave_overwrites_slot(
        self, store: TripStore, default_params: TripParameters
    ) -> None:
        store.save_autosave(default_params)
        store.save_autosave(set_duration(default_params, 4))

        restored = store.load_autosave()
        assert restored is not None
        assert restored.duration_days == 4

    def test_stored_copy_is_isolated(
        self, store: TripStore, default_params: TripParameters
    ) -> None:
        trip = _trip("a", default_params)
        store.save_trip(trip)

        trip.params.bike_daily_rental_costs[0] = 999.0

        loaded = store.get_trip("a")
        assert loaded is not None
        assert loaded.params.bike_daily_rental_costs[0] == 30.0


class TestLocalFileStore:
    def test_file_layout(self, tmp_path: Path, default_params: TripParameters) -> None:
        path = tmp_path / "saves.json"
        repository = LocalFileTripRepository(path)

        repository.save_trip(_trip("a", default_params))
        repository.save_autosave(default_params)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [record["id"] for record in data["saves"]] == ["a"]
        assert data["saves"][0]["params"]["tripName"] == "Tour Ciclistico Toscana"
        assert data["autosave"]["durationDays"] == 7

    def test_corrupted_file_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "saves.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(SnapshotRejectedError):
            LocalFileTripRepository(path).list_trips()

    def test_tampered_record_is_rejected(
        self, tmp_path: Path, default_params: TripParameters
    ) -> None:
        path = tmp_path / "saves.json"
        repository = LocalFileTripRepository(path)
        repository.save_trip(_trip("a", default_params))

        data = json.loads(path.read_text(encoding="utf-8"))
        data["saves"][0]["params"]["durationDays"] = 10
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(SnapshotRejectedError):
            repository.list_trips()

    def test_concurrent_autosave_and_saves_keep_file_valid(
        self, tmp_path: Path, default_params: TripParameters
    ) -> None:
        path = tmp_path / "saves.json"
        repository = LocalFileTripRepository(path)
        stop = threading.Event()
        errors: list[Exception] = []

        def autosave_loop() -> None:
            while not stop.is_set():
                try:
                    repository.save_autosave(default_params)
                except Exception as e:
                    errors.append(e)
                    return

        worker = threading.Thread(target=autosave_loop)
        worker.start()
        try:
            for index in range(60):
                repository.save_trip(_trip(f"t{index}", default_params, index))
        finally:
            stop.set()
            worker.join()

        assert errors == []
        assert len(repository.list_trips()) == 60
        assert repository.load_autosave() == default_params
        assert [p.name for p in tmp_path.iterdir()] == ["saves.json"]


class TestSqlEngine:
    def test_requires_database_url(self) -> None:
        with pytest.raises(ValueError, match="TOURCALC_DATABASE_URL"):
            create_engine_from_settings(Settings(database_url=""))

    def test_sqlite_file_database(self, tmp_path: Path, default_params: TripParameters) -> None:
        engine = create_engine_from_settings(
            Settings(database_url=f"sqlite:///{tmp_path / 'trips.db'}")
        )
        init_db(engine)
        repository = SqlTripRepository(create_session_factory(engine))

        repository.save_trip(_trip("a", default_params))

        assert [trip.id for trip in repository.list_trips()] == ["a"]
        engine.dispose()
