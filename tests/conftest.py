"""
Shared fixtures: an in-memory SQLite database wired into the app through the
get_db override, bearer tokens for an owner and a stranger, and seeded stores.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_admin.main import app
from catalog_admin.models.store import Base, Store, get_db, enable_sqlite_foreign_keys
from catalog_admin.models.attributes import Category, Size, Color, Gender
import catalog_admin.models.product  # noqa: F401  register Product/Image tables
from catalog_admin.utils.security import create_access_token

OWNER_ID = "user_owner"
OTHER_ID = "user_other"


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _override(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()
    return override_get_db


@pytest.fixture
def client(session_factory):
    app.dependency_overrides[get_db] = _override(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(session_factory):
    """Client that returns 500 responses instead of re-raising server errors."""
    app.dependency_overrides[get_db] = _override(session_factory)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def bearer(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def owner_headers():
    return bearer(OWNER_ID)


@pytest.fixture
def other_headers():
    return bearer(OTHER_ID)


@pytest.fixture
def store(db):
    s = Store(name="Main store", user_id=OWNER_ID)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def other_store(db):
    s = Store(name="Someone else's store", user_id=OTHER_ID)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


def seed_catalog(db, store_id):
    """Create one category, size, color and gender in a store and return their ids."""
    rows = {
        "categoryId": Category(store_id=store_id, name="Shirts"),
        "sizeId": Size(store_id=store_id, name="Medium", value="M"),
        "colorId": Color(store_id=store_id, name="Red", value="#ff0000"),
        "genderId": Gender(store_id=store_id, name="Men", value="men"),
    }
    db.add_all(rows.values())
    db.commit()
    return {key: row.id for key, row in rows.items()}


@pytest.fixture
def catalog(db, store):
    return seed_catalog(db, store.id)


@pytest.fixture
def other_catalog(db, other_store):
    return seed_catalog(db, other_store.id)
