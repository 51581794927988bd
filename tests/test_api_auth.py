"""HTTP tests for /api/v1/auth routes and error mapping, using the app's in-memory SQLite engine."""

import unittest

from fastapi.testclient import TestClient

from biblioteca_auth.core.config import settings
from biblioteca_auth.core.database import SessionLocal, engine
from biblioteca_auth.main import app
from biblioteca_auth.models import Base, RefreshToken, User, UserStatus

PREFIX = f"{settings.API_V1_PREFIX}/auth"
PASSWORD = "s3cret-pass"


class _ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        Base.metadata.drop_all(engine)

    def _register(self, username: str = "sofia", role_id: int = 1, **overrides: object):
        body = {
            "name": "Sofía Gómez",
            "username": username,
            "email": f"{username}@example.org",
            "password": PASSWORD,
            "role_id": role_id,
        }
        body.update(overrides)
        return self.client.post(f"{PREFIX}/register", json=body)

    def _activate(self, username: str = "sofia") -> None:
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.username == username).one()
            user.status = int(UserStatus.ACTIVE)
            db.commit()
        finally:
            db.close()

    def _login(self, username: str = "sofia", password: str = PASSWORD):
        return self.client.post(
            f"{PREFIX}/login", json={"username": username, "password": password}
        )

    def _active_session(self, username: str = "sofia", role_id: int = 1) -> dict:
        self._register(username, role_id=role_id)
        self._activate(username)
        response = self._login(username)
        self.assertEqual(response.status_code, 200)
        return response.json()


class TestRegisterEndpoint(_ApiTestCase):
    def test_register_returns_201(self) -> None:
        response = self._register()
        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertIsInstance(data["user_id"], int)
        self.assertIn("verifique su email", data["message"])

    def test_duplicate_username_is_409(self) -> None:
        self._register()
        response = self._register(email="otra@example.org")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(
            response.json(),
            {"detail": "El username ya está en uso", "code": "DUPLICATE_USERNAME"},
        )

    def test_duplicate_email_is_409(self) -> None:
        self._register()
        response = self._register(username="sofia2", email="sofia@example.org")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "DUPLICATE_EMAIL")

    def test_short_password_is_422(self) -> None:
        response = self._register(password="short")
        self.assertEqual(response.status_code, 422)

    def test_unknown_role_is_422(self) -> None:
        response = self._register(role_id=99)
        self.assertEqual(response.status_code, 422)

    def test_password_over_72_bytes_is_422(self) -> None:
        # 40 two-byte characters: within the character limit, over bcrypt's 72 bytes.
        response = self._register(password="ñ" * 40)
        self.assertEqual(response.status_code, 422)


class TestLoginEndpoint(_ApiTestCase):
    def test_inactive_account_is_403(self) -> None:
        self._register()
        response = self._login()
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json(),
            {"detail": "Cuenta inactiva. Verifique su email.", "code": "ACCOUNT_INACTIVE"},
        )

    def test_wrong_password_is_401(self) -> None:
        self._register()
        self._activate()
        response = self._login(password="wrong-password")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "INVALID_CREDENTIALS")
        self.assertEqual(response.json()["detail"], "Credenciales inválidas")

    def test_short_wrong_password_is_401(self) -> None:
        self._register()
        self._activate()
        response = self._login(password="abc")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"detail": "Credenciales inválidas", "code": "INVALID_CREDENTIALS"},
        )

    def test_unknown_user_is_401(self) -> None:
        response = self._login(username="ghost")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "INVALID_CREDENTIALS")

    def test_librarian_login(self) -> None:
        data = self._active_session(role_id=2)
        self.assertEqual(data["message"], "Login exitoso")
        self.assertEqual(data["token_type"], "bearer")
        self.assertTrue(data["access_token"])
        self.assertTrue(data["refresh_token"])
        self.assertEqual(data["user_info"]["role_name"], "Bibliotecario")
        self.assertEqual(data["user_info"]["username"], "sofia")
        self.assertEqual(
            data["permissions"],
            [
                "VER_CATALOGO",
                "SOLICITAR_PRESTAMO",
                "VER_MIS_PRESTAMOS",
                "APROBAR_PRESTAMO",
                "GESTIONAR_LIBROS",
                "VER_TODOS_PRESTAMOS",
            ],
        )


class TestRefreshEndpoint(_ApiTestCase):
    def test_refresh_echoes_refresh_token(self) -> None:
        session = self._active_session()
        response = self.client.post(
            f"{PREFIX}/refresh", json={"refresh_token": session["refresh_token"]}
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["refresh_token"], session["refresh_token"])
        self.assertEqual(data["message"], "Token renovado exitosamente")

        me = self.client.get(
            f"{PREFIX}/me", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["user_info"]["user_id"], session["user_id"])

    def test_revoked_refresh_token_is_401(self) -> None:
        session = self._active_session()
        db = SessionLocal()
        try:
            db.query(RefreshToken).update({RefreshToken.revoked: True})
            db.commit()
        finally:
            db.close()
        response = self.client.post(
            f"{PREFIX}/refresh", json={"refresh_token": session["refresh_token"]}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"detail": "Refresh token inválido o revocado", "code": "INVALID_REFRESH_TOKEN"},
        )


    def test_empty_refresh_token_is_401(self) -> None:
        response = self.client.post(f"{PREFIX}/refresh", json={"refresh_token": ""})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "INVALID_REFRESH_TOKEN")
        self.assertEqual(response.json()["detail"], "Refresh token inválido o revocado")

    def test_overlong_refresh_token_is_401(self) -> None:
        response = self.client.post(f"{PREFIX}/refresh", json={"refresh_token": "x" * 300})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "INVALID_REFRESH_TOKEN")


class TestProtectedEndpoints(_ApiTestCase):
    def test_me_requires_bearer_token(self) -> None:
        response = self.client.get(f"{PREFIX}/me")
        self.assertEqual(response.status_code, 401)

    def test_me_rejects_garbage_token(self) -> None:
        response = self.client.get(
            f"{PREFIX}/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        self.assertEqual(response.status_code, 401)

    def test_me_returns_profile_and_permissions(self) -> None:
        session = self._active_session(role_id=1)
        response = self.client.get(
            f"{PREFIX}/me", headers={"Authorization": f"Bearer {session['access_token']}"}
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["user_info"]["email"], "sofia@example.org")
        self.assertEqual(
            data["permissions"],
            ["VER_CATALOGO", "SOLICITAR_PRESTAMO", "VER_MIS_PRESTAMOS"],
        )

    def test_users_list_requires_user_management_permission(self) -> None:
        student = self._active_session("estudiante", role_id=1)
        response = self.client.get(
            f"{PREFIX}/users",
            headers={"Authorization": f"Bearer {student['access_token']}"},
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_lists_users(self) -> None:
        self._register("pendiente")
        admin = self._active_session("admin", role_id=3)
        response = self.client.get(
            f"{PREFIX}/users",
            headers={"Authorization": f"Bearer {admin['access_token']}"},
        )
        self.assertEqual(response.status_code, 200)
        usernames = [u["username"] for u in response.json()["users"]]
        self.assertEqual(usernames, ["pendiente", "admin"])


class TestHealthEndpoint(_ApiTestCase):
    def test_health_reports_database(self) -> None:
        response = self.client.get(f"{settings.API_V1_PREFIX}/health/")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["database"], "connected")


if __name__ == "__main__":
    unittest.main()
