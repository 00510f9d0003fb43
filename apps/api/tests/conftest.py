"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database per test (file tables + an owning record table)
- Recording RecordStore for tests that only inspect issued writes
- HTTPX AsyncClient bound to the test session
"""
import os
from typing import Any, AsyncGenerator, Generator, Mapping

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app engine off the local database file
os.environ["DATABASE_URL"] = "sqlite://"

from attach_files.core.deps import get_db
from attach_files.db.base import Base
from attach_files.db.models import StoredFile
from attach_files.main import app


# =============================================================================
# Owning record table (created by SaveToDatabase in a real pipeline)
# =============================================================================

ITEMS_TABLE = "tx_items"

owning_metadata = MetaData()

items = Table(
    ITEMS_TABLE,
    owning_metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(100), nullable=True),
    Column("images", Integer, nullable=False, server_default="0"),
    Column("files", Integer, nullable=False, server_default="0"),
)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    owning_metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    """Session on a fresh in-memory database; app code may commit freely."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(scope="function")
def item_id(db: Session) -> int:
    """Insert an owning record and return its id."""
    db.execute(items.insert().values(id=42, title="Listing"))
    db.commit()
    return 42


@pytest.fixture(scope="function")
def stored_files(db: Session) -> dict[int, StoredFile]:
    """Stored files with fixed ids 10, 11 and 20."""
    files = {
        file_id: StoredFile(
            id=file_id,
            storage_pid=1,
            storage_key=f"uploads/{file_id}.jpg",
            filename=f"upload-{file_id}.jpg",
            content_type="image/jpeg",
            file_size=1024,
        )
        for file_id in (10, 11, 20)
    }
    db.add_all(files.values())
    db.commit()
    return files


@pytest.fixture(scope="function")
def item_counts(db: Session):
    """Return a reader for the count columns of an owning record."""
    def read(record_id: int) -> dict[str, int]:
        row = db.execute(
            select(items.c.images, items.c.files).where(items.c.id == record_id)
        ).one()
        return {"images": row.images, "files": row.files}

    return read


# =============================================================================
# Recording store
# =============================================================================

class RecordingStore:
    """RecordStore that keeps every write in memory."""

    def __init__(self, fail_on_insert: int | None = None, update_matches: int = 1):
        self.inserts: list[tuple[str, dict[str, Any]]] = []
        self.updates: list[tuple[str, dict[str, Any], dict[str, Any]]] = []
        self.fail_on_insert = fail_on_insert
        self.update_matches = update_matches

    def insert(self, table: str, row: Mapping[str, Any]) -> None:
        if self.fail_on_insert is not None and len(self.inserts) == self.fail_on_insert:
            raise RuntimeError("insert rejected")
        self.inserts.append((table, dict(row)))

    def update(
        self, table: str, values: Mapping[str, Any], match: Mapping[str, Any]
    ) -> int:
        self.updates.append((table, dict(values), dict(match)))
        return self.update_matches


@pytest.fixture(scope="function")
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture(scope="function")
def make_store():
    """Factory for RecordingStore instances with failure settings."""
    return RecordingStore


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient whose requests use the test session.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def server_error_client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient that returns unhandled errors as HTTP 500 responses.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
