"""HTTP-level tests against the real app and an in-memory SQLite store."""

import unittest

from sqlalchemy.exc import IntegrityError

from app.models import Snippet, User
from app.schemas.auth import Role
from tests.support import bearer, make_test_client, reset_overrides


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.client, self.Session = make_test_client()

    def tearDown(self) -> None:
        reset_overrides()

    def register(self, username: str, password: str = "pw123", role: str = "student") -> dict:
        resp = self.client.post(
            "/register", json={"username": username, "password": password, "role": role}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["user"]

    def login(self, username: str, password: str = "pw123") -> dict[str, str]:
        resp = self.client.post("/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['token']}"}


class TestStudentScenario(ApiTestCase):
    """Register, log in, read profile, get bounced from admin routes."""

    def test_register_login_profile_and_admin_denial(self) -> None:
        resp = self.client.post(
            "/register", json={"username": "alice", "password": "pw123", "role": "student"}
        )
        self.assertEqual(resp.status_code, 201)
        user = resp.json()["user"]
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["role"], "student")
        self.assertNotIn("password_hash", user)
        self.assertNotIn("password", user)

        resp = self.client.post("/login", json={"username": "alice", "password": "pw123"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], "student")
        auth = {"Authorization": f"Bearer {resp.json()['token']}"}

        resp = self.client.get("/profile", headers=auth)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"username": "alice", "role": "student"})

        resp = self.client.get("/users", headers=auth)
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["kind"], "role_not_permitted")

        resp = self.client.get("/users")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["kind"], "token_invalid_or_expired")


class TestRegisterAndLogin(ApiTestCase):
    def test_login_failures_are_uniform(self) -> None:
        self.register("alice")
        wrong_pw = self.client.post("/login", json={"username": "alice", "password": "bad"})
        no_user = self.client.post("/login", json={"username": "nobody", "password": "pw123"})
        self.assertEqual(wrong_pw.status_code, 401)
        self.assertEqual(no_user.status_code, 401)
        self.assertEqual(wrong_pw.json(), no_user.json())

    def test_duplicate_username_is_store_failure(self) -> None:
        self.register("alice")
        resp = self.client.post(
            "/register", json={"username": "alice", "password": "other", "role": "student"}
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["kind"], "store_failure")

    def test_unknown_role_rejected_by_validation(self) -> None:
        resp = self.client.post(
            "/register", json={"username": "eve", "password": "pw", "role": "superuser"}
        )
        self.assertEqual(resp.status_code, 422)

    def test_missing_fields_rejected_by_validation(self) -> None:
        resp = self.client.post("/login", json={"username": "x"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["kind"], "validation_failure")
        self.assertEqual(resp.json()["detail"][0]["loc"], ["body", "password"])

    def test_password_is_stored_hashed(self) -> None:
        self.register("alice")
        with self.Session() as db:
            stored = db.query(User).filter(User.username == "alice").one()
            self.assertTrue(stored.password_hash.startswith("$argon2id$"))


class TestProfile(ApiTestCase):
    def test_update_profile_changes_credentials(self) -> None:
        self.register("alice")
        auth = self.login("alice")
        resp = self.client.put(
            "/profile", json={"username": "alice2", "password": "newpw"}, headers=auth
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "Profile updated successfully.")
        self.assertEqual(
            self.client.post("/login", json={"username": "alice", "password": "pw123"}).status_code,
            401,
        )
        self.login("alice2", "newpw")

    def test_profile_of_deleted_account_is_not_found(self) -> None:
        resp = self.client.get("/profile", headers=bearer(999, Role.STUDENT))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "User not found")

    def test_admin_cannot_use_student_profile_route(self) -> None:
        self.assertEqual(
            self.client.get("/profile", headers=bearer(1, Role.ADMIN)).status_code, 401
        )


class TestAdminUserManagement(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register("root", "rootpw", "admin")
        self.admin = self.login("root", "rootpw")

    def test_list_users_without_hashes(self) -> None:
        self.register("alice")
        resp = self.client.get("/users", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        users = resp.json()
        self.assertEqual([u["username"] for u in users], ["root", "alice"])
        self.assertEqual(set(users[0]), {"id", "username", "role"})

    def test_create_user(self) -> None:
        resp = self.client.post(
            "/users",
            json={"username": "bob", "password": "bobpw", "role": "student"},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["username"], "bob")
        self.login("bob", "bobpw")

    def test_role_change_applies_only_after_relogin(self) -> None:
        alice = self.register("alice")
        old_token = self.login("alice")
        resp = self.client.put(
            f"/user/{alice['id']}/role", json={"role": "admin"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "User role updated successfully.")
        # Old token still carries "student".
        self.assertEqual(self.client.get("/users", headers=old_token).status_code, 401)
        self.assertEqual(self.client.get("/users", headers=self.login("alice")).status_code, 200)

    def test_delete_user(self) -> None:
        alice = self.register("alice")
        resp = self.client.delete(f"/user/{alice['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "User deleted successfully.")
        self.assertEqual(
            self.client.post("/login", json={"username": "alice", "password": "pw123"}).status_code,
            401,
        )

    def test_delete_user_removes_their_snippets(self) -> None:
        bob = self.register("bob")
        resp = self.client.post(
            "/snippets", json={"content": "bob wrote this"}, headers=self.login("bob")
        )
        snippet_id = resp.json()["id"]

        resp = self.client.delete(f"/user/{bob['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get("/snippets").json(), [])

        mallory = self.register("mallory")
        self.assertNotEqual(mallory["id"], bob["id"])
        resp = self.client.put(
            f"/snippets/{snippet_id}", json={"content": "hijack"}, headers=self.login("mallory")
        )
        self.assertEqual(resp.status_code, 404)

    def test_student_cannot_delete_users(self) -> None:
        alice = self.register("alice")
        resp = self.client.delete(f"/user/{alice['id']}", headers=self.login("alice"))
        self.assertEqual(resp.status_code, 401)


class TestSnippets(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice_id = self.register("alice")["id"]
        self.bob_id = self.register("bob")["id"]
        self.register("root", "rootpw", "admin")
        self.alice = self.login("alice")
        self.bob = self.login("bob")
        self.admin = self.login("root", "rootpw")

    def create(self, content: str, headers: dict[str, str]) -> dict:
        resp = self.client.post("/snippets", json={"content": content}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_sets_author_from_token(self) -> None:
        snippet = self.create("print('hi')", self.alice)
        self.assertEqual(snippet["author_id"], self.alice_id)
        self.assertEqual(snippet["content"], "print('hi')")

    def test_create_requires_token(self) -> None:
        resp = self.client.post("/snippets", json={"content": "x"})
        self.assertEqual(resp.status_code, 403)

    def test_list_is_public_and_newest_first(self) -> None:
        first = self.create("first", self.alice)
        second = self.create("second", self.bob)
        resp = self.client.get("/snippets")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([s["id"] for s in resp.json()], [second["id"], first["id"]])

    def test_author_can_edit(self) -> None:
        snippet = self.create("v1", self.alice)
        resp = self.client.put(
            f"/snippets/{snippet['id']}", json={"content": "v2"}, headers=self.alice
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "Snippet updated successfully.")
        self.assertEqual(self.client.get("/snippets").json()[0]["content"], "v2")

    def test_other_student_cannot_edit_or_delete(self) -> None:
        snippet = self.create("v1", self.alice)
        resp = self.client.put(
            f"/snippets/{snippet['id']}", json={"content": "hijack"}, headers=self.bob
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["kind"], "ownership_violation")
        resp = self.client.delete(f"/snippets/{snippet['id']}", headers=self.bob)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.get("/snippets").json()[0]["content"], "v1")

    def test_admin_can_edit_and_delete_any(self) -> None:
        snippet = self.create("v1", self.alice)
        resp = self.client.put(
            f"/snippets/{snippet['id']}", json={"content": "moderated"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f"/snippets/{snippet['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "Snippet deleted successfully.")
        self.assertEqual(self.client.get("/snippets").json(), [])

    def test_missing_snippet_is_not_found_before_ownership(self) -> None:
        resp = self.client.put("/snippets/9999", json={"content": "x"}, headers=self.bob)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Snippet not found")
        self.assertEqual(self.client.delete("/snippets/9999", headers=self.bob).status_code, 404)

    def test_edit_with_invalid_token_is_rejected_before_lookup(self) -> None:
        resp = self.client.put(
            "/snippets/9999",
            json={"content": "x"},
            headers={"Authorization": "Bearer forged.token.value"},
        )
        self.assertEqual(resp.status_code, 403)


class TestSchemaConstraints(ApiTestCase):
    """Integrity rules enforced by the database itself."""

    def test_unknown_role_row_rejected(self) -> None:
        with self.Session() as db:
            db.add(User(username="carol", password_hash="x", role="teacher"))
            with self.assertRaises(IntegrityError):
                db.commit()

    def test_snippet_for_missing_author_rejected(self) -> None:
        with self.Session() as db:
            db.add(Snippet(author_id=999, content="orphan"))
            with self.assertRaises(IntegrityError):
                db.commit()


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
