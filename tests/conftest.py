import os
import tempfile

# Settings must be in place before closer_crm.config is imported
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="closer-crm-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from closer_crm.database import Database
from closer_crm.main import create_app
from closer_crm.models import Role, User
from closer_crm.security import hash_password
from closer_crm.storage import LocalFileStore

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"
CLOSER_PASSWORD = "closer-pass"


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return Database("sqlite://", engine=engine)


@pytest.fixture
def file_store(tmp_path):
    return LocalFileStore(str(tmp_path / "uploads"))


@pytest.fixture
def client(database, file_store):
    app = create_app(database=database, file_store=file_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(database, client):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login(client, email: str, password: str) -> str:
    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def admin_token(client, database):
    session = database.session()
    try:
        session.add(
            User(
                email=ADMIN_EMAIL,
                name="Admin",
                role=Role.ADMIN.value,
                password_hash=hash_password(ADMIN_PASSWORD),
                group_objective=0,
            )
        )
        session.commit()
    finally:
        session.close()
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def register_closer(client, admin_token: str, email: str, name: str = "Closer", objective: float = 0) -> int:
    response = client.post(
        "/api/users/register",
        json={
            "email": email,
            "password": CLOSER_PASSWORD,
            "name": name,
            "role": "CLOSER",
            "objective": objective,
        },
        headers=auth_header(admin_token),
    )
    assert response.status_code == 201, response.text
    return response.json()["userId"]


@pytest.fixture
def closer_a(client, admin_token):
    user_id = register_closer(client, admin_token, "closer.a@example.com", "Closer A")
    return {"id": user_id, "token": login(client, "closer.a@example.com", CLOSER_PASSWORD)}


@pytest.fixture
def closer_b(client, admin_token):
    user_id = register_closer(client, admin_token, "closer.b@example.com", "Closer B")
    return {"id": user_id, "token": login(client, "closer.b@example.com", CLOSER_PASSWORD)}


def create_client_record(client, token: str, **overrides) -> int:
    payload = {"name": "Jane Buyer", "email": "jane@buyer.com", "companyName": "Buyer SA"}
    payload.update(overrides)
    response = client.post("/api/clients", json=payload, headers=auth_header(token))
    assert response.status_code == 201, response.text
    return response.json()["clientId"]
