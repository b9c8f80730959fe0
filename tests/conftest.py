# tests/conftest.py

from __future__ import annotations

import os

# must be set before app.core.config builds its Settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ADMIN_SECRET", "test-admin-secret")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-0123456789abcdef")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import get_database  # noqa: E402
from app.main import app  # noqa: E402
from app.models.tasks import TaskStore  # noqa: E402
from app.models.user import Role, UserStore  # noqa: E402
from app.services.task_access import Caller, TaskAccess  # noqa: E402
from app.utils.auth_utils import decode_token  # noqa: E402
from app.utils.hash_utils import hash_password  # noqa: E402

from .fakes import FakeDatabase  # noqa: E402

ADMIN_SECRET = os.environ["ADMIN_SECRET"]


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def users(fake_db: FakeDatabase) -> UserStore:
    return UserStore(fake_db)


@pytest.fixture()
def access(fake_db: FakeDatabase, users: UserStore) -> TaskAccess:
    return TaskAccess(TaskStore(fake_db, users), users)


@pytest.fixture()
def make_user(users: UserStore):
    """Create a user directly in the store and return it as a Caller."""

    async def _make(name: str, role: Role = Role.USER) -> Caller:
        user_id = await users.create(name, f"{name.lower()}@example.com", hash_password("secret1"), role)
        return Caller(user_id=user_id, role=role)

    return _make


@pytest.fixture()
def client(fake_db: FakeDatabase):
    """
    TestClient wired to the in-memory database.

    Not used as a context manager, so the startup hook never tries to reach
    a real MongoDB.
    """
    app.dependency_overrides[get_database] = lambda: fake_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def signup(client: TestClient):
    """Register (or create an admin) through the API and return auth headers + id."""

    def _signup(name: str, admin: bool = False) -> dict:
        email = f"{name.lower()}@example.com"
        body = {"name": name, "email": email, "password": "secret1"}
        if admin:
            body["adminSecret"] = ADMIN_SECRET
            res = client.post("/api/v1/auth/create-admin", json=body)
        else:
            res = client.post("/api/v1/auth/register", json=body)
        assert res.status_code == 201, res.text

        res = client.post("/api/v1/auth/login", json={"email": email, "password": "secret1"})
        assert res.status_code == 200, res.text
        token = res.json()["token"]

        return {
            "id": decode_token(token)["userId"],
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _signup
