import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from telework.core.security import actor_for_user
from telework.db import models, session
from telework.main import app
from telework.schemas.user import UserCreate
from telework.services import accounts

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = session.build_engine("sqlite://", poolclass=StaticPool)
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[session.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Service-level helpers ---

def make_user(db, email, role="User", first_name="Alice", last_name="Smith", position="Developer"):
    user = accounts.create_account(db, UserCreate(
        email=email, password=PASSWORD, first_name=first_name,
        last_name=last_name, position=position, role=role,
    ))
    return user.id


def actor_of(db, user_id):
    """Re-resolves the actor so company links made since are visible."""
    db.expire_all()
    return actor_for_user(db.get(models.User, user_id))


# --- HTTP helpers ---

def register(client, email, role="User", first_name="Alice", last_name="Smith", position="Developer"):
    resp = client.post("/auth/register", json={
        "email": email, "password": PASSWORD, "first_name": first_name,
        "last_name": last_name, "position": position, "role": role,
    })
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
