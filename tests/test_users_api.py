# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient


class TestUsersApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="healthquest-test-"))
        data_root = cls._tmp / "data"
        os.environ["HEALTHQUEST_DATA_ROOT"] = str(data_root)
        os.environ["HEALTHQUEST_DB_PATH"] = str(data_root / "healthquest.db")
        os.environ["FOODLOG_CLEANUP_ENABLED"] = "false"

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name == "healthquest" or name.startswith("healthquest."):
                sys.modules.pop(name, None)

        from healthquest.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _create(self, email: str, **extra) -> dict:
        body = {"email": email, "password": "secret1", "profile_name": "FitWarrior"}
        body.update(extra)
        resp = self.client.post("/api/createUser", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_normalizes_email_and_hides_password(self) -> None:
        user = self._create("  Runner@Example.com ", height_cm=180, weight_kg=81)
        self.assertEqual(user["email"], "runner@example.com")
        self.assertEqual(user["avatar"], "avator1.jpeg")
        self.assertEqual(user["bmi"], 25.0)
        self.assertNotIn("password", user)
        self.assertNotIn("password_hash", user)

        resp = self.client.get("/api/getUser/RUNNER@example.com")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], user["id"])

    def test_duplicate_email_rejected(self) -> None:
        self._create("dup@example.com")
        resp = self.client.post(
            "/api/createUser",
            json={"email": "DUP@example.com", "password": "secret1", "profile_name": "Again"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "User with this email already exists")

    def test_create_validation(self) -> None:
        bad = [
            {"email": "not-an-email", "password": "secret1", "profile_name": "X"},
            {"email": "short@example.com", "password": "123", "profile_name": "X"},
            {"email": "long@example.com", "password": "secret1", "profile_name": "x" * 51},
            {"email": "young@example.com", "password": "secret1", "profile_name": "X", "age": 12},
            {"email": "goal@example.com", "password": "secret1", "profile_name": "X", "primary_goal": "fly"},
        ]
        for body in bad:
            resp = self.client.post("/api/createUser", json=body)
            self.assertEqual(resp.status_code, 422, body)

    def test_get_missing_user(self) -> None:
        resp = self.client.get("/api/getUser/nobody@example.com")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "User not found")

    def test_list_users(self) -> None:
        self._create("listed@example.com")
        resp = self.client.get("/api/getUser")
        self.assertEqual(resp.status_code, 200)
        emails = [u["email"] for u in resp.json()]
        self.assertIn("listed@example.com", emails)

    def test_update_profile_and_bmi(self) -> None:
        self._create("update@example.com", height_cm=200)
        self.assertIsNone(self.client.get("/api/getUser/update@example.com").json()["bmi"])

        resp = self.client.put(
            "/api/updateUser/update@example.com",
            json={
                "profile_name": "  New Name ",
                "avatar": "avatar2.png",
                "weight_kg": 100,
                "allergies": ["nuts", "dairy"],
                "diet_type": "vegan",
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        user = resp.json()
        self.assertEqual(user["profile_name"], "New Name")
        self.assertEqual(user["avatar"], "avatar2.png")
        self.assertEqual(user["bmi"], 25.0)
        self.assertEqual(user["allergies"], ["nuts", "dairy"])
        self.assertEqual(user["diet_type"], "vegan")
        self.assertEqual(user["height_cm"], 200)

    def test_update_password_is_rehashed(self) -> None:
        from healthquest.users.storage import get_user_row_by_email

        self._create("pw@example.com")
        before = get_user_row_by_email("pw@example.com")
        assert before is not None
        resp = self.client.put("/api/updateUser/pw@example.com", json={"password": "another-secret"})
        self.assertEqual(resp.status_code, 200)
        self.assertNotIn("password", resp.json())
        self.assertNotIn("password_hash", resp.json())

        row = get_user_row_by_email("pw@example.com")
        assert row is not None
        self.assertTrue(row["password_hash"].startswith("pbkdf2_sha256$200000$"))
        self.assertNotEqual(row["password_hash"], before["password_hash"])
        self.assertNotIn("another-secret", row["password_hash"])

    def test_update_null_text_fields_are_blanked(self) -> None:
        self._create("blank@example.com", full_name="Jo Runner", gender="female", dietary_notes="no onions")
        resp = self.client.put(
            "/api/updateUser/blank@example.com",
            json={"full_name": None, "gender": None, "dietary_notes": None, "age": None},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        user = resp.json()
        self.assertEqual(user["full_name"], "")
        self.assertEqual(user["gender"], "")
        self.assertEqual(user["dietary_notes"], "")
        self.assertIsNone(user["age"])
        self.assertEqual(self.client.get("/api/getUser/blank@example.com").json()["full_name"], "")

    def test_update_email(self) -> None:
        self._create("old@example.com")
        self._create("taken@example.com")

        resp = self.client.put("/api/updateUser/old@example.com", json={"email": "taken@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email already exists")

        resp = self.client.put("/api/updateUser/old@example.com", json={"email": "New@Example.com"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "new@example.com")
        self.assertEqual(self.client.get("/api/getUser/old@example.com").status_code, 404)
        self.assertEqual(self.client.get("/api/getUser/new@example.com").status_code, 200)

    def test_update_missing_user(self) -> None:
        resp = self.client.put("/api/updateUser/ghost@example.com", json={"profile_name": "Ghost"})
        self.assertEqual(resp.status_code, 404)

    def test_username_must_be_unique(self) -> None:
        self._create("u1@example.com", username="runner")
        resp = self.client.post(
            "/api/createUser",
            json={"email": "u2@example.com", "password": "secret1", "profile_name": "X", "username": "runner"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Username already exists")

    def test_delete_user(self) -> None:
        self._create("bye@example.com")
        resp = self.client.delete("/api/deleteUser/BYE@example.com")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "User deleted successfully")

        resp = self.client.delete("/api/deleteUser/bye@example.com")
        self.assertEqual(resp.status_code, 404)


class TestBmiAndPasswords(unittest.TestCase):
    def test_compute_bmi(self) -> None:
        from healthquest.users.storage import compute_bmi

        self.assertEqual(compute_bmi(175, 70), 22.9)
        self.assertIsNone(compute_bmi(None, 70))
        self.assertIsNone(compute_bmi(175, None))
        # Out-of-range results are dropped instead of stored.
        self.assertIsNone(compute_bmi(100, 300))

    def test_password_hash_is_salted(self) -> None:
        from healthquest.users.passwords import hash_password

        hashed = hash_password("secret1")
        scheme, iterations, salt, digest = hashed.split("$")
        self.assertEqual(scheme, "pbkdf2_sha256")
        self.assertEqual(iterations, "200000")
        self.assertTrue(salt)
        self.assertTrue(digest)
        self.assertNotIn("secret1", hashed)
        self.assertNotEqual(hashed, hash_password("secret1"))


if __name__ == "__main__":
    unittest.main()
