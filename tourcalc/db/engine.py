"""Database engine and session factory."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from tourcalc.config import Settings
from tourcalc.db.models import Base


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If TOURCALC_DATABASE_URL is unset or empty.
    """
    if not settings.database_url:
        raise ValueError(
            "TOURCALC_DATABASE_URL must be set to a valid connection string "
            "to use the cloud trip store."
        )

    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # API handlers run in a worker thread pool
        connect_args["check_same_thread"] = False

    return create_engine(
        settings.database_url, pool_pre_ping=True, echo=False, connect_args=connect_args
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create the trip tables if they do not exist."""
    Base.metadata.create_all(engine)
