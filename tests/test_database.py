"""Engine and metadata wiring."""

from towtrack.config import settings
from towtrack.infrastructure import models  # noqa: F401  registers the tables
from towtrack.infrastructure.database import Base, engine


def test_pool_follows_settings():
    pool = engine.sync_engine.pool
    assert pool.size() == settings.db_pool_size
    assert engine.echo is settings.db_echo


def test_metadata_holds_domain_tables():
    assert set(Base.metadata.tables) == {"users", "clients", "trips"}
