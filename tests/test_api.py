"""HTTP tests: routes, status codes and error bodies over a seeded in-memory store."""

import unittest

from fastapi.testclient import TestClient

from dossier.api.deps import get_storage
from dossier.core.config import settings
from dossier.core.security import create_access_token, role_for
from dossier.schemas.clearance import MAX_LEVEL
from dossier.main import app
from dossier.storage import MemoryStorage
from dossier.storage.seed import load_world

API = settings.API_PREFIX


class _ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = MemoryStorage()
        load_world(self.storage)
        app.dependency_overrides[get_storage] = lambda: self.storage
        self.client = TestClient(app)
        self.user = self.storage.create_user("player", "unused-hash")
        self.headers = self.auth_headers(self.user)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    @staticmethod
    def auth_headers(user) -> dict[str, str]:
        token = create_access_token(sub=user.id, role=role_for(user.is_admin))
        return {"Authorization": f"Bearer {token}"}

    def add_credential(self, username: str, **levels: int):
        return self.storage.create_credential(
            {"username": username, "password": "secret", "display_name": username, **levels}
        )

    def verify(self, username: str, password: str = "secret"):
        return self.client.post(
            f"{API}/credentials/verify",
            json={"username": username, "password": password},
            headers=self.headers,
        )


class TestAuthentication(_ApiTestCase):
    def test_missing_token_is_401(self) -> None:
        response = self.client.get(f"{API}/credentials")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["kind"], "Unauthenticated")

    def test_garbage_token_is_401(self) -> None:
        response = self.client.get(
            f"{API}/credentials", headers={"Authorization": "Bearer not-a-jwt"}
        )
        self.assertEqual(response.status_code, 401)

    def test_register_login_and_me(self) -> None:
        body = {"username": "newcomer", "password": "long-enough-password"}
        response = self.client.post(f"{API}/auth/register", json=body)
        self.assertEqual(response.status_code, 201)
        duplicate = self.client.post(f"{API}/auth/register", json=body)
        self.assertEqual(duplicate.status_code, 409)

        login = self.client.post(f"{API}/auth/login", json=body)
        self.assertEqual(login.status_code, 200)
        token = login.json()["access_token"]
        me = self.client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(me.json()["username"], "newcomer")
        self.assertEqual(me.json()["role"], "user")

        bad = self.client.post(
            f"{API}/auth/login", json={"username": "newcomer", "password": "wrong-password"}
        )
        self.assertEqual(bad.status_code, 401)

    def test_admin_routes_forbidden_for_players(self) -> None:
        for path in ("/auth/users", "/admin/credentials"):
            response = self.client.get(f"{API}{path}", headers=self.headers)
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.json()["kind"], "Forbidden")

    def test_admin_lists_credential_catalog(self) -> None:
        admin = self.storage.create_user("boss", "unused-hash", is_admin=True)
        response = self.client.get(f"{API}/admin/credentials", headers=self.auth_headers(admin))
        self.assertEqual(response.status_code, 200)
        usernames = [c["username"] for c in response.json()]
        self.assertIn("visitor_temporary", usernames)
        self.assertNotIn("password", response.json()[0])


class TestCredentialEndpoints(_ApiTestCase):
    def test_verify_selects_and_reports_obsolete(self) -> None:
        low = self.add_credential("low", securityLevel=1)
        self.add_credential("high", securityLevel=2)
        first = self.verify("low")
        self.assertEqual(first.status_code, 200)
        self.assertIsNone(first.json()["obsoleteCredential"])

        second = self.verify("high")
        body = second.json()
        self.assertEqual(body["credential"]["displayName"], "high")
        self.assertEqual(body["obsoleteCredential"]["id"], low.id)
        self.assertNotIn("password", body["credential"])

        held = self.client.get(f"{API}/credentials", headers=self.headers).json()
        selected = [h["username"] for h in held if h["isSelected"]]
        self.assertEqual(selected, ["high"])
        self.assertEqual(held[0]["securityLevel"], 1)

    def test_verify_bad_password_is_401(self) -> None:
        response = self.verify("visitor_temporary", "nope")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["kind"], "InvalidCredentials")

    def test_verify_twice_is_409(self) -> None:
        self.verify("visitor_temporary", "guest123")
        response = self.verify("visitor_temporary", "guest123")
        self.assertEqual(response.status_code, 409)
        body = response.json()
        self.assertEqual(body["kind"], "AlreadyAcquired")
        self.assertEqual(body["credential"]["username"], "visitor_temporary")

    def test_select_and_delete_unheld_are_404(self) -> None:
        cred = self.add_credential("stranger")
        select = self.client.post(f"{API}/credentials/select/{cred.id}", headers=self.headers)
        self.assertEqual(select.status_code, 404)
        self.assertEqual(select.json()["kind"], "NotOwned")
        delete = self.client.delete(f"{API}/credentials/{cred.id}", headers=self.headers)
        self.assertEqual(delete.status_code, 404)

    def test_select_then_delete(self) -> None:
        a = self.add_credential("a")
        self.add_credential("b")
        self.verify("a")
        self.verify("b")
        response = self.client.post(f"{API}/credentials/select/{a.id}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["binding"]["isSelected"])
        response = self.client.delete(f"{API}/credentials/{a.id}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        held = self.client.get(f"{API}/credentials", headers=self.headers).json()
        self.assertEqual([h["isSelected"] for h in held], [False])

    def test_create_credential(self) -> None:
        response = self.client.post(
            f"{API}/credentials/create",
            json={
                "username": "found_login",
                "password": "hunter2",
                "displayName": "Found Login",
                "medicalLevel": 2,
            },
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["medicalLevel"], 2)
        self.assertTrue(response.json()["isActive"])

    def test_create_credential_invalid_is_400(self) -> None:
        response = self.client.post(
            f"{API}/credentials/create",
            json={"username": "x", "password": "y"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["kind"], "ValidationError")
        self.assertIn("displayName", [e["field"] for e in body["errors"]])

    def test_reset_progress(self) -> None:
        self.verify("visitor_temporary", "guest123")
        response = self.client.post(f"{API}/user/reset-progress", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["removed"], 1)
        self.assertEqual(self.client.get(f"{API}/credentials", headers=self.headers).json(), [])

    def test_dangling_binding_is_generic_500(self) -> None:
        cred = self.add_credential("ghost")
        self.verify("ghost")
        self.storage._credentials.pop(cred.id)
        response = self.client.get(f"{API}/credentials", headers=self.headers)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"kind": "ServerError", "message": "Internal server error"})


class TestProtectedResources(_ApiTestCase):
    def document_id(self, code: str) -> int:
        return next(d.id for d in self.storage.get_documents() if d.document_code == code)

    def test_no_selection_is_403_without_current_levels(self) -> None:
        response = self.client.get(
            f"{API}/documents/{self.document_id('DOC-2301')}", headers=self.headers
        )
        self.assertEqual(response.status_code, 403)
        body = response.json()
        self.assertTrue(body["accessDenied"])
        self.assertEqual(body["message"], "Access denied - No credential selected")
        self.assertEqual(body["requiredLevels"], {"security": 1, "medical": 0, "admin": 0})
        self.assertNotIn("currentLevels", body)

    def test_insufficient_clearance_reports_both_levels(self) -> None:
        self.verify("visitor_temporary", "guest123")
        response = self.client.get(
            f"{API}/documents/{self.document_id('DOC-4382')}", headers=self.headers
        )
        self.assertEqual(response.status_code, 403)
        body = response.json()
        self.assertEqual(body["message"], "Access denied - Insufficient permissions")
        self.assertEqual(body["requiredLevels"], {"security": 0, "medical": 2, "admin": 0})
        self.assertEqual(body["currentLevels"], {"security": 0, "medical": 0, "admin": 0})

    def test_sufficient_clearance_returns_document(self) -> None:
        self.add_credential("doctor", medicalLevel=2)
        self.verify("doctor")
        response = self.client.get(
            f"{API}/documents/{self.document_id('DOC-4382')}", headers=self.headers
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["documentCode"], "DOC-4382")
        self.assertEqual(response.json()["images"], ["neural_scan.jpg"])

    def test_unknown_document_is_404(self) -> None:
        response = self.client.get(f"{API}/documents/9999", headers=self.headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["kind"], "NotFound")

    def test_accessible_documents_query(self) -> None:
        response = self.client.get(
            f"{API}/documents/accessible",
            params={"securityLevel": 2},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([d["documentCode"] for d in response.json()], ["DOC-2301"])

    def test_highest_grantable_credential_can_query_accessible(self) -> None:
        created = self.client.post(
            f"{API}/credentials/create",
            json={
                "username": "overseer",
                "password": "vault",
                "displayName": "Overseer",
                "securityLevel": MAX_LEVEL,
            },
            headers=self.headers,
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(self.verify("overseer", "vault").status_code, 200)
        response = self.client.get(
            f"{API}/documents/accessible",
            params={"securityLevel": created.json()["securityLevel"]},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([d["documentCode"] for d in response.json()], ["DOC-2301"])

    def test_level_above_maximum_is_400_everywhere(self) -> None:
        created = self.client.post(
            f"{API}/credentials/create",
            json={
                "username": "too_high",
                "password": "pw",
                "displayName": "Too High",
                "securityLevel": MAX_LEVEL + 1,
            },
            headers=self.headers,
        )
        self.assertEqual(created.status_code, 400)
        self.assertEqual(created.json()["kind"], "ValidationError")
        response = self.client.get(
            f"{API}/documents/accessible",
            params={"securityLevel": MAX_LEVEL + 1},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)

    def test_accessible_documents_rejects_negative_level(self) -> None:
        response = self.client.get(
            f"{API}/documents/accessible",
            params={"securityLevel": -1},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)

    def test_document_list_is_unfiltered(self) -> None:
        response = self.client.get(f"{API}/documents", headers=self.headers)
        self.assertEqual(len(response.json()), 3)

    def test_terminals_follow_selected_credential(self) -> None:
        listed = self.client.get(f"{API}/terminals", headers=self.headers).json()
        self.assertEqual(listed, [])
        self.add_credential("ops", securityLevel=3, medicalLevel=1)
        self.verify("ops")
        listed = self.client.get(f"{API}/terminals", headers=self.headers).json()
        self.assertEqual(len(listed), 4)
        response = self.client.get(f"{API}/terminals/{listed[0]['id']}", headers=self.headers)
        self.assertEqual(response.status_code, 200)

    def test_personnel_gate_and_not_found(self) -> None:
        person = self.storage.get_personnel_files()[0]
        response = self.client.get(f"{API}/personnel/{person.id}", headers=self.headers)
        self.assertEqual(response.status_code, 403)
        missing = self.client.get(f"{API}/personnel/9999", headers=self.headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Personnel file not found")


class TestHealth(_ApiTestCase):
    def test_health_reports_storage(self) -> None:
        response = self.client.get(f"{API}/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["storage"], "memory")
        self.assertEqual(body["database"], "connected")


if __name__ == "__main__":
    unittest.main()
