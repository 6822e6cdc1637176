import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from redirector.core.config import Settings
from redirector.core.db import Base


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'redirector.db'}"


@pytest.fixture
def test_settings(db_url):
    """Settings pointing at a temporary SQLite file, isolated from env/.env."""
    return Settings(
        _env_file=None,
        CI=False,
        DATABASE_URL=db_url,
        CONNECT_RETRIES=3,
        COLLECTION_RETRIES=3,
        RETRY_DELAY_SECONDS=0.0,
        DEFAULT_ADMIN_NAME="admin",
        DEFAULT_ADMIN_PASSWORD="pass",
    )


@pytest.fixture
def bare_engine(db_url):
    """Engine on an empty database (no tables)."""
    engine = create_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(bare_engine):
    Base.metadata.create_all(bare_engine)
    return bare_engine


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session
