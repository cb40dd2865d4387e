"""Shared pytest fixtures for all test suites."""

import random
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from tourcalc.api.deps import get_advisory_session, get_trip_repository, get_trip_session
from tourcalc.db.inmemory import InMemoryTripRepository
from tourcalc.llm.client import DeterministicStubClient
from tourcalc.llm.session import AdvisorySession
from tourcalc.main import app
from tourcalc.models.common import ExtraDaysSide, StaffRoleName
from tourcalc.models.trip import TripParameters, default_trip_parameters
from tourcalc.pricing.reconciler import set_duration, set_extra_days
from tourcalc.session import TripSession


@pytest.fixture
def default_params() -> TripParameters:
    """The default 8-person, 7-day scenario."""
    return default_trip_parameters()


def generate_random_params(seed: int) -> TripParameters:
    """Build a shape-consistent snapshot with random sizes and costs.

    Shapes are produced through the reconciler so the result always
    satisfies the per-day length rules; values are then randomized in place
    of the defaults without changing any length.
    """
    rng = random.Random(seed)
    params = default_trip_parameters()
    params = set_duration(params, rng.randint(0, 14))
    for role in StaffRoleName:
        for side in ExtraDaysSide:
            params = set_extra_days(params, role, side, rng.randint(0, 4))

    def scramble(values: list[float]) -> list[float]:
        return [float(rng.randint(0, 300)) for _ in values]

    guide = params.guide.model_copy(
        update={
            "daily_rates_during": scramble(params.guide.daily_rates_during),
            "daily_rates_before": scramble(params.guide.daily_rates_before),
            "daily_rates_after": scramble(params.guide.daily_rates_after),
            "included": rng.random() > 0.2,
        }
    )
    driver = params.driver.model_copy(
        update={
            "daily_rates_during": scramble(params.driver.daily_rates_during),
            "daily_rates_before": scramble(params.driver.daily_rates_before),
            "daily_rates_after": scramble(params.driver.daily_rates_after),
            "included": rng.random() > 0.2,
        }
    )
    vector_fields = [
        name
        for name, value in params
        if isinstance(value, list) and name != "hotel_stays"
    ]
    update: dict[str, object] = {
        name: scramble(getattr(params, name)) for name in vector_fields
    }
    update.update(
        guide=guide,
        driver=driver,
        participant_count=rng.randint(0, 20),
        profit_margin_percent=float(rng.randint(0, 50)),
        banking_fee_percent=float(rng.randint(0, 5)),
        agency_commission_percent=float(rng.randint(0, 20)),
        client_total_transfer_cost=float(rng.randint(0, 1000)),
        has_bike_rental=rng.random() > 0.3,
    )
    return params.model_copy(update=update)


@pytest.fixture
def random_params() -> Callable[[int], TripParameters]:
    """Factory for seeded random snapshots."""
    return generate_random_params


@pytest.fixture
def repository() -> InMemoryTripRepository:
    return InMemoryTripRepository()


@pytest.fixture
def trip_session() -> TripSession:
    return TripSession()


@pytest.fixture
def advisory_session() -> AdvisorySession:
    return AdvisorySession(DeterministicStubClient())


@pytest.fixture
def client(
    repository: InMemoryTripRepository,
    trip_session: TripSession,
    advisory_session: AdvisorySession,
) -> Generator[TestClient, None, None]:
    """Test client wired to in-memory collaborators."""
    app.dependency_overrides[get_trip_repository] = lambda: repository
    app.dependency_overrides[get_trip_session] = lambda: trip_session
    app.dependency_overrides[get_advisory_session] = lambda: advisory_session
    yield TestClient(app)
    app.dependency_overrides.clear()
