from __future__ import annotations

from collections.abc import Iterator
from itertools import count

import pytest
from fastapi.testclient import TestClient

from users_backend.api import create_api
from users_backend.database import (
    StoreError,
    StoreErrorKind,
    StoreResult,
    Stored,
    UserSchema,
    get_user_repository,
)


class FakeUserRepository:
    """In-memory repository used to mock database operations."""

    def __init__(self) -> None:
        self._store: dict[int, UserSchema] = {}
        self._ids = count(1)
        self.unavailable = False

    def _email_taken(self, email: str, *, exclude: int | None = None) -> bool:
        return any(
            user.email == email and user_id != exclude
            for user_id, user in self._store.items()
        )

    async def list_all(self) -> StoreResult[list[UserSchema]]:
        if self.unavailable:
            return StoreError(StoreErrorKind.UNAVAILABLE)
        return Stored(list(self._store.values()))

    async def get_by_id(self, user_id: int) -> StoreResult[UserSchema]:
        user = self._store.get(user_id)
        if user is None:
            return StoreError(StoreErrorKind.NOT_FOUND)
        return Stored(user)

    async def create(self, *, name: str, email: str) -> StoreResult[UserSchema]:
        if self._email_taken(email):
            return StoreError(StoreErrorKind.CONFLICT)
        user = UserSchema(id=next(self._ids), name=name, email=email)
        self._store[user.id] = user
        return Stored(user)

    async def update_by_id(
        self, user_id: int, *, name: str, email: str
    ) -> StoreResult[UserSchema]:
        user = self._store.get(user_id)
        if user is None:
            return StoreError(StoreErrorKind.NOT_FOUND)
        if self._email_taken(email, exclude=user_id):
            return StoreError(StoreErrorKind.CONFLICT)
        user.name = name
        user.email = email
        return Stored(user)

    async def delete_by_id(self, user_id: int) -> StoreResult[UserSchema]:
        user = self._store.pop(user_id, None)
        if user is None:
            return StoreError(StoreErrorKind.NOT_FOUND)
        return Stored(user)


class ExplodingUserRepository(FakeUserRepository):
    async def list_all(self) -> StoreResult[list[UserSchema]]:
        msg = "boom"
        raise RuntimeError(msg)


@pytest.fixture
def repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def client(repository: FakeUserRepository) -> Iterator[TestClient]:
    app = create_api()
    app.dependency_overrides[get_user_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create(client: TestClient, name: str = "Ada", email: str = "ada@example.com"):
    return client.post("/user", json={"name": name, "email": email})


def test_create_user_success(client: TestClient) -> None:
    response = _create(client)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User is Created"
    assert data["user"] == {"id": 1, "name": "Ada", "email": "ada@example.com"}


def test_create_then_get_returns_same_record(client: TestClient) -> None:
    user_id = _create(client).json()["user"]["id"]

    response = client.get(f"/user/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"id": user_id, "name": "Ada", "email": "ada@example.com"}


def test_create_user_invalid_email(client: TestClient) -> None:
    response = _create(client, email="not-an-email")

    assert response.status_code == 400
    assert response.json()["message"].startswith("email: ")
    assert client.get("/user").json() == []


def test_create_user_duplicate_email(client: TestClient) -> None:
    assert _create(client).status_code == 200

    response = _create(client, name="Impostor")

    assert response.status_code == 400
    assert response.json() == {
        "message": "Email is already in use. Please use a different email."
    }
    assert len(client.get("/user").json()) == 1


def test_create_user_missing_body(client: TestClient) -> None:
    response = client.post("/user")

    assert response.status_code == 400
    assert "valid dictionary" in response.json()["message"]


def test_create_user_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/user", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Request body is not valid JSON."}


def test_list_users(client: TestClient) -> None:
    _create(client)
    _create(client, name="Grace", email="grace@example.com")

    response = client.get("/user")

    assert response.status_code == 200
    assert [user["name"] for user in response.json()] == ["Ada", "Grace"]


def test_get_user_not_found(client: TestClient) -> None:
    response = client.get("/user/999999")

    assert response.status_code == 404
    assert response.json() == {"message": "User not found."}


@pytest.mark.parametrize("raw_id", ["abc", "1.5", "12abc"])
def test_invalid_user_id_format(client: TestClient, raw_id: str) -> None:
    for method in ("GET", "DELETE"):
        response = client.request(method, f"/user/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid user ID format."}

    response = client.put(
        f"/user/{raw_id}", json={"name": "Ada", "email": "ada@example.com"}
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid user ID format."}


@pytest.mark.parametrize("method", ["PUT", "PATCH"])
def test_update_user_round_trip(client: TestClient, method: str) -> None:
    user_id = _create(client).json()["user"]["id"]

    response = client.request(
        method,
        f"/user/{user_id}",
        json={"name": "Grace", "email": "grace@example.com"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "User updated successfully.",
        "user": {"id": user_id, "name": "Grace", "email": "grace@example.com"},
    }
    assert client.get(f"/user/{user_id}").json()["name"] == "Grace"


def test_very_long_numeric_id_is_not_found(client: TestClient) -> None:
    raw_id = "9" * 5000

    for method in ("GET", "DELETE"):
        response = client.request(method, f"/user/{raw_id}")
        assert response.status_code == 404
        assert response.json() == {"message": "User not found."}

    response = client.put(
        f"/user/{raw_id}", json={"name": "Ada", "email": "ada@example.com"}
    )
    assert response.status_code == 404


def test_create_user_rejects_display_name_email(client: TestClient) -> None:
    response = _create(client, email="Ada Lovelace <ada@example.com>")

    assert response.status_code == 400
    assert response.json()["message"].startswith("email: ")
    assert client.get("/user").json() == []


def test_update_missing_user_returns_single_404(client: TestClient) -> None:
    response = client.put("/user/77", json={"name": "Ada", "email": "ada@example.com"})

    assert response.status_code == 404
    assert response.json() == {"message": "User not found."}


def test_update_user_invalid_payload(client: TestClient) -> None:
    user_id = _create(client).json()["user"]["id"]

    response = client.put(f"/user/{user_id}", json={"name": "", "email": "ada@example.com"})

    assert response.status_code == 400
    assert response.json()["message"].startswith("name: ")


def test_update_user_email_conflict(client: TestClient) -> None:
    _create(client)
    user_id = _create(client, name="Grace", email="grace@example.com").json()["user"]["id"]

    response = client.put(
        f"/user/{user_id}", json={"name": "Grace", "email": "ada@example.com"}
    )

    assert response.status_code == 400
    assert "already in use" in response.json()["message"]


def test_delete_user_then_get_is_404(client: TestClient) -> None:
    user_id = _create(client).json()["user"]["id"]

    response = client.delete(f"/user/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully."}
    assert client.get(f"/user/{user_id}").status_code == 404
    assert client.delete(f"/user/{user_id}").status_code == 404


def test_store_unavailable_returns_500(
    client: TestClient, repository: FakeUserRepository
) -> None:
    repository.unavailable = True

    response = client.get("/user")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error."}


def test_unexpected_exception_returns_500() -> None:
    app = create_api()
    app.dependency_overrides[get_user_repository] = ExplodingUserRepository
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/user")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error."}


def test_unexpected_exception_is_logged_without_traceback(
    caplog: pytest.LogCaptureFixture,
) -> None:
    app = create_api()
    app.dependency_overrides[get_user_repository] = ExplodingUserRepository
    with TestClient(app, raise_server_exceptions=False) as client:
        client.get("/user")

    records = [
        record for record in caplog.records if record.name == "users_backend.api.errors"
    ]
    assert len(records) == 1
    assert records[0].exc_info is None
    assert "boom" in records[0].getMessage()


def test_unknown_route_uses_message_body(client: TestClient) -> None:
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
