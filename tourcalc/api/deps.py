"""Process-wide dependencies for the API routes.

The app serves one operator, so the current TripSession and the advisory
session are single shared instances. Tests swap them through
app.dependency_overrides.
"""

import logging
from functools import lru_cache

from tourcalc.config import get_settings
from tourcalc.db.engine import create_engine_from_settings, create_session_factory, init_db
from tourcalc.db.local_store import LocalFileTripRepository
from tourcalc.db.repositories import TripStore
from tourcalc.db.sql_repositories import SqlTripRepository
from tourcalc.llm.client import get_advisory_client
from tourcalc.llm.session import AdvisorySession
from tourcalc.pricing.reconciler import ReshapePolicy
from tourcalc.session import TripSession

logger = logging.getLogger(__name__)


@lru_cache
def get_trip_repository() -> TripStore:
    """Cloud store when a database URL is configured, local JSON file otherwise."""
    settings = get_settings()
    if settings.database_url:
        engine = create_engine_from_settings(settings)
        init_db(engine)
        logger.info("Using SQL trip store")
        return SqlTripRepository(create_session_factory(engine))

    logger.info(f"Using local trip store at {settings.local_store_path}")
    return LocalFileTripRepository(settings.local_store_path)


@lru_cache
def get_trip_session() -> TripSession:
    return TripSession(policy=ReshapePolicy.from_settings(get_settings()))


@lru_cache
def get_advisory_session() -> AdvisorySession:
    return AdvisorySession(get_advisory_client(get_settings()))
