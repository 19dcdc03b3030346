"""API tests for login, logout, session check and role gating."""

import unittest

from app.models import UserSession
from tests.support import ADMIN_PASSWORD, ADMIN_USERNAME, USER_PASSWORD, ApiTestCase


class TestLogin(ApiTestCase):
    def test_admin_login_yields_admin_role(self) -> None:
        resp = self.login(self.client, ADMIN_USERNAME, ADMIN_PASSWORD)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["role"], "admin")
        self.assertEqual(body["redirectUrl"], "/admin/dashboard")
        self.assertIn(self.settings.SESSION_COOKIE_NAME, resp.cookies)

    def test_session_cookie_is_http_only(self) -> None:
        resp = self.login(self.client, ADMIN_USERNAME, ADMIN_PASSWORD)
        cookie_header = resp.headers["set-cookie"].lower()
        self.assertIn("httponly", cookie_header)
        self.assertIn("max-age=86400", cookie_header)

    def test_user_login_redirects_elsewhere(self) -> None:
        self.add_user("ravi")
        resp = self.login(self.client, "ravi", USER_PASSWORD)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], "user")
        self.assertEqual(resp.json()["redirectUrl"], "/user/dashboard")

    def test_wrong_password_is_401(self) -> None:
        resp = self.login(self.client, ADMIN_USERNAME, "not-the-password")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Invalid credentials"})

    def test_unknown_user_is_401(self) -> None:
        resp = self.login(self.client, "ghost", "whatever-pass")
        self.assertEqual(resp.status_code, 401)

    def test_missing_fields_is_400(self) -> None:
        for body in ({}, {"username": "admin"}, {"password": "x"}, {"username": " ", "password": "x"}):
            with self.subTest(body=body):
                resp = self.client.post("/api/auth/login", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["error"], "Username and password are required")

    def test_relogin_replaces_session(self) -> None:
        self.login(self.client, ADMIN_USERNAME, ADMIN_PASSWORD)
        self.login(self.client, ADMIN_USERNAME, ADMIN_PASSWORD)
        self.assertEqual(self.count_rows(UserSession), 1)


class TestSessionCheckAndLogout(ApiTestCase):
    def test_check_anonymous(self) -> None:
        resp = self.client.get("/api/auth/check")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"authenticated": False})

    def test_check_after_login(self) -> None:
        client = self.admin_client()
        resp = client.get("/api/auth/check")
        self.assertEqual(
            resp.json(),
            {"authenticated": True, "role": "admin", "username": ADMIN_USERNAME},
        )

    def test_logout_invalidates_session_server_side(self) -> None:
        client = self.admin_client()
        token = client.cookies.get(self.settings.SESSION_COOKIE_NAME)
        resp = client.post("/api/auth/logout")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])
        self.assertEqual(self.count_rows(UserSession), 0)

        # Replaying the old token no longer works.
        replay = self.new_client().get(
            "/api/admin/users",
            headers={"Cookie": f"{self.settings.SESSION_COOKIE_NAME}={token}"},
        )
        self.assertEqual(replay.status_code, 401)

    def test_logout_without_session(self) -> None:
        resp = self.client.post("/api/auth/logout")
        self.assertEqual(resp.status_code, 200)

    def test_deleted_user_loses_session(self) -> None:
        user_id = self.add_user("ravi")
        user = self.user_client("ravi")
        admin = self.admin_client()
        self.assertEqual(admin.delete(f"/api/admin/users/{user_id}").status_code, 200)
        self.assertEqual(user.get("/api/user/data").status_code, 401)


class TestRoleGating(ApiTestCase):
    ADMIN_ENDPOINTS = (
        ("get", "/api/admin/users"),
        ("post", "/api/admin/users"),
        ("delete", "/api/admin/users/1"),
        ("get", "/api/admin/data"),
        ("post", "/api/admin/data"),
        ("put", "/api/admin/data/1"),
        ("delete", "/api/admin/data/1"),
        ("post", "/api/admin/data/1/upload"),
    )

    def test_anonymous_gets_401_everywhere(self) -> None:
        for method, path in self.ADMIN_ENDPOINTS + (
            ("get", "/api/user/data"),
            ("get", "/api/user/download/x.pdf"),
        ):
            with self.subTest(method=method, path=path):
                resp = getattr(self.client, method)(path)
                self.assertEqual(resp.status_code, 401)
                self.assertEqual(resp.json(), {"error": "Authentication required"})

    def test_user_gets_401_on_admin_endpoints(self) -> None:
        self.add_user("ravi")
        client = self.user_client("ravi")
        for method, path in self.ADMIN_ENDPOINTS:
            with self.subTest(method=method, path=path):
                resp = getattr(client, method)(path)
                self.assertEqual(resp.status_code, 401)
                self.assertEqual(resp.json(), {"error": "Admin access required"})

    def test_health_is_public(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_unknown_route_renders_error_body(self) -> None:
        resp = self.client.get("/api/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertIn("error", resp.json())


if __name__ == "__main__":
    unittest.main()
