import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool

from wellness.database import get_session
from wellness.main import app


# ------------------ engine ------------------
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


# ------------------ cliente HTTP ------------------
@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def register(client: TestClient, email: str, password: str = "segredo123") -> dict:
    response = client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text

    response = client.post("/auth/login", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(client: TestClient):
    return register(client, "owner@test.com")


@pytest.fixture(name="other_headers")
def other_headers_fixture(client: TestClient):
    return register(client, "other@test.com")


@pytest.fixture(name="client_id")
def client_id_fixture(client: TestClient, auth_headers: dict):
    response = client.post(
        "/clients/",
        json={"first_name": "Sarah", "last_name": "Johnson", "email": "sarah@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
