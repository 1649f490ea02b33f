"""HTTP tests for the /user and /health endpoints using FastAPI's TestClient and SQLite."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.user import get_user_service
from app.core.config import APP_VERSION, Settings, get_settings
from app.core.database import get_db
from app.core.security import PasswordHashingError, decode_access_token
from app.main import app
from app.models import Base
from app.services.user_repository import DatabaseError
from app.services.users import UserService

TEST_SECRET = "test-secret-with-at-least-32-bytes!!"

ALICE = {
    "pseudo": "alice",
    "email": "a@x.com",
    "password_hash": "secret123",
    "role": "user",
}


class ApiTestCase(unittest.TestCase):
    """Each test gets an empty in-memory database wired in through dependency overrides."""

    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        testing_session = sessionmaker(bind=engine, autoflush=False)

        def override_get_db():
            db = testing_session()
            try:
                yield db
            finally:
                db.close()

        self.settings = Settings(JWT_SECRET=TEST_SECRET, BCRYPT_ROUNDS=4)
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def _create(self, body: dict | None = None) -> dict:
        resp = self.client.post("/user/create", json=body or ALICE)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()


class TestUserLifecycle(ApiTestCase):
    """create → get → delete → get returns 404."""

    def test_create_get_delete_scenario(self) -> None:
        created = self._create()
        user_id = created["id"]
        self.assertIsInstance(user_id, int)
        self.assertNotEqual(created["password_hash"], "secret123")
        self.assertEqual(created["pseudo"], "alice")

        resp = self.client.get(f"/user/get/{user_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), created)

        resp = self.client.delete(f"/user/delete/{user_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"deleted": 1})

        resp = self.client.get(f"/user/get/{user_id}")
        self.assertEqual(resp.status_code, 404)


class TestCreate(ApiTestCase):
    def test_missing_password_is_422(self) -> None:
        resp = self.client.post("/user/create", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["detail"], "A password is required to create a user")

    def test_duplicate_email_is_500(self) -> None:
        self._create()
        resp = self.client.post("/user/create", json=ALICE)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to create user!")


class TestList(ApiTestCase):
    def test_empty_list(self) -> None:
        resp = self.client.get("/user/list")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_lists_all_users(self) -> None:
        self._create(dict(ALICE, email="a@x.com"))
        self._create(dict(ALICE, email="b@x.com", pseudo="bob"))
        resp = self.client.get("/user/list")
        self.assertEqual([u["pseudo"] for u in resp.json()], ["alice", "bob"])


class TestDelete(ApiTestCase):
    def test_delete_unknown_id_is_200_with_zero(self) -> None:
        resp = self.client.delete("/user/delete/4242")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"deleted": 0})


class TestUpdate(ApiTestCase):
    def test_partial_update(self) -> None:
        created = self._create()
        resp = self.client.put(f"/user/update/{created['id']}", json={"role": "admin"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["role"], "admin")
        self.assertEqual(body["pseudo"], "alice")
        self.assertEqual(body["password_hash"], created["password_hash"])

    def test_null_fields_are_ignored(self) -> None:
        created = self._create()
        resp = self.client.put(
            f"/user/update/{created['id']}", json={"pseudo": None, "email": "new@x.com"}
        )
        self.assertEqual(resp.json()["pseudo"], "alice")
        self.assertEqual(resp.json()["email"], "new@x.com")

    def test_empty_password_is_422_and_login_unchanged(self) -> None:
        created = self._create()
        resp = self.client.put(f"/user/update/{created['id']}", json={"password_hash": ""})
        self.assertEqual(resp.status_code, 422)
        login = self.client.post("/user/login", json={"email": "a@x.com", "password": "secret123"})
        self.assertEqual(login.status_code, 200)

    def test_unknown_id_is_404_and_server_keeps_serving(self) -> None:
        resp = self.client.put("/user/update/999", json={"pseudo": "ghost"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self.client.get("/user/list").status_code, 200)


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._create()

    def test_login_returns_bearer_token(self) -> None:
        resp = self.client.post("/user/login", json={"email": "a@x.com", "password": "secret123"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["token_type"], "bearer")
        payload = decode_access_token(body["access_token"], TEST_SECRET)
        self.assertEqual(payload["sub"], "a@x.com")

    def test_wrong_password_and_unknown_email_look_the_same(self) -> None:
        wrong = self.client.post("/user/login", json={"email": "a@x.com", "password": "nope"})
        unknown = self.client.post(
            "/user/login", json={"email": "who@x.com", "password": "secret123"}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())

    def test_missing_secret_is_500(self) -> None:
        self.settings = Settings(JWT_SECRET="", BCRYPT_ROUNDS=4)
        resp = self.client.post("/user/login", json={"email": "a@x.com", "password": "secret123"})
        self.assertEqual(resp.status_code, 500)


class TestInternalErrors(ApiTestCase):
    """Failures below the handler turn into 500 responses instead of crashing."""

    def _with_failing_service(self, **side_effects: Exception) -> None:
        repo = MagicMock()
        for method, error in side_effects.items():
            getattr(repo, method).side_effect = error
        app.dependency_overrides[get_user_service] = lambda: UserService(repo)

    def test_database_error_on_list(self) -> None:
        self._with_failing_service(get_all=DatabaseError("Failed to list user"))
        resp = self.client.get("/user/list")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to get users!")

    def test_database_error_on_delete(self) -> None:
        self._with_failing_service(delete=DatabaseError("Failed to delete user"))
        self.assertEqual(self.client.delete("/user/delete/1").status_code, 500)

    def test_database_error_on_get(self) -> None:
        self._with_failing_service(get_by_id=DatabaseError("Failed to load user"))
        self.assertEqual(self.client.get("/user/get/1").status_code, 500)

    def test_malformed_stored_hash_on_login(self) -> None:
        self._with_failing_service(login=PasswordHashingError("Failed to verify password"))
        resp = self.client.post("/user/login", json={"email": "a@x.com", "password": "x"})
        self.assertEqual(resp.status_code, 500)

    def test_hashing_failure_on_update(self) -> None:
        self._with_failing_service(update=PasswordHashingError("Failed to hash password"))
        resp = self.client.put("/user/update/1", json={"password_hash": "x"})
        self.assertEqual(resp.status_code, 500)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["environment"], self.settings.APP_ENV)
        self.assertEqual(body["version"], APP_VERSION)

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json()["message"], "User Service API")


if __name__ == "__main__":
    unittest.main()
