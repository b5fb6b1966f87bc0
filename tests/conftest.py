# =============================================================================
# Shared fixtures: in-memory database, tenant, API client
# =============================================================================

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import validate_current_token
from shared.core.database import Base, get_asset_db
from shared.core.schemas import UserToken
from asset_service.app import models  # noqa: F401
from asset_service.app.crud import asset_types_crud, attribute_definitions_crud
from asset_service.app.main import app
from asset_service.app.schemas.asset_type_schemas import AssetTypeCreate
from asset_service.app.schemas.attribute_definition_schemas import AttributeDefinitionCreate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def org_id():
    return uuid.uuid4()


@pytest.fixture
def user_id():
    return "user-1"


@pytest.fixture
def current_user(org_id, user_id):
    return UserToken(user_id=user_id, org_id=org_id, name="Test User", status="active")


@pytest.fixture
def client(session_factory, current_user):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_asset_db] = override_get_db
    app.dependency_overrides[validate_current_token] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_asset_type(db, org_id):
    def _make(name="Laptop", **kwargs):
        return asset_types_crud.create_asset_type(
            db, org_id, AssetTypeCreate(name=name, **kwargs))
    return _make


@pytest.fixture
def make_definition(db, org_id):
    def _make(asset_type, name, field_type="text", label=None, **kwargs):
        return attribute_definitions_crud.create_attribute_definition(
            db, org_id,
            AttributeDefinitionCreate(
                asset_type_id=asset_type.id,
                name=name,
                label=label or name,
                field_type=field_type,
                **kwargs,
            ))
    return _make
