"""Profile self-service and admin user management."""

import unittest

from tests.support import API, ApiTestCase, bearer


class TestProfile(ApiTestCase):
    """GET/PUT /users/profile for the authenticated user."""

    def setUp(self) -> None:
        super().setUp()
        self.token, self.user = self.register("pat@tasks.io", first_name="Pat", last_name="Lee")

    def test_get_profile(self) -> None:
        resp = self.client.get(f"{API}/users/profile", headers=bearer(self.token))
        self.assertEqual(resp.status_code, 200)
        profile = resp.json()["data"]
        self.assertEqual(profile["id"], self.user["id"])
        self.assertEqual(profile["firstName"], "Pat")
        self.assertEqual(profile["lastName"], "Lee")
        self.assertEqual(profile["role"], "user")
        self.assertTrue(profile["isActive"])

    def test_update_names(self) -> None:
        resp = self.client.put(
            f"{API}/users/profile", json={"firstName": "Patricia"}, headers=bearer(self.token)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Profile updated successfully")
        profile = resp.json()["data"]
        self.assertEqual(profile["firstName"], "Patricia")
        self.assertEqual(profile["lastName"], "Lee")

    def test_cannot_change_role_or_email(self) -> None:
        resp = self.client.put(
            f"{API}/users/profile",
            json={"lastName": "Li", "role": "admin", "email": "x@tasks.io", "isActive": False},
            headers=bearer(self.token),
        )
        self.assertEqual(resp.status_code, 200)
        profile = resp.json()["data"]
        self.assertEqual(profile["lastName"], "Li")
        self.assertEqual(profile["role"], "user")
        self.assertEqual(profile["email"], "pat@tasks.io")
        self.assertTrue(profile["isActive"])

    def test_no_fields_to_update(self) -> None:
        resp = self.client.put(f"{API}/users/profile", json={}, headers=bearer(self.token))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "No fields to update")

    def test_blank_name_rejected(self) -> None:
        for body in ({"firstName": ""}, {"firstName": "   "}, {"lastName": "\t "}):
            with self.subTest(body=body):
                resp = self.client.put(
                    f"{API}/users/profile", json=body, headers=bearer(self.token)
                )
                self.assertEqual(resp.status_code, 400)
        profile = self.client.get(f"{API}/users/profile", headers=bearer(self.token)).json()
        self.assertEqual(profile["data"]["firstName"], "Pat")

    def test_names_are_trimmed(self) -> None:
        resp = self.client.put(
            f"{API}/users/profile",
            json={"firstName": "  Ada "},
            headers=bearer(self.token),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["firstName"], "Ada")


class TestAdminUsers(ApiTestCase):
    """GET /users and PUT /users/{id} (admin only)."""

    def setUp(self) -> None:
        super().setUp()
        self.admin_id, self.admin = self.make_user("admin@tasks.io", role="admin")

    def test_list_users_paginated(self) -> None:
        for i in range(3):
            self.register(f"user{i}@tasks.io")
        resp = self.client.get(
            f"{API}/users", params={"page": 1, "limit": 2}, headers=bearer(self.admin)
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(len(data["users"]), 2)
        self.assertEqual(
            data["pagination"],
            {
                "currentPage": 1,
                "totalPages": 2,
                "totalUsers": 4,
                "hasNextPage": True,
                "hasPrevPage": False,
            },
        )
        for user in data["users"]:
            self.assertNotIn("passwordHash", user)
            self.assertNotIn("password", user)

    def test_update_role_and_active_flag(self) -> None:
        _, user = self.register("worker@tasks.io")
        resp = self.client.put(
            f"{API}/users/{user['id']}",
            json={"role": "admin", "isActive": False, "firstName": "Wanda"},
            headers=bearer(self.admin),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "User updated successfully")
        updated = resp.json()["data"]
        self.assertEqual(updated["role"], "admin")
        self.assertFalse(updated["isActive"])
        self.assertEqual(updated["firstName"], "Wanda")

    def test_deactivation_takes_effect_immediately(self) -> None:
        token, user = self.register("soon-gone@tasks.io")
        self.assertEqual(
            self.client.get(f"{API}/tasks", headers=bearer(token)).status_code, 200
        )
        self.client.put(
            f"{API}/users/{user['id']}", json={"isActive": False}, headers=bearer(self.admin)
        )
        resp = self.client.get(f"{API}/tasks", headers=bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Account is deactivated")

        self.client.put(
            f"{API}/users/{user['id']}", json={"isActive": True}, headers=bearer(self.admin)
        )
        self.assertEqual(
            self.client.get(f"{API}/tasks", headers=bearer(token)).status_code, 200
        )

    def test_promotion_takes_effect_with_existing_token(self) -> None:
        token, user = self.register("rising@tasks.io")
        self.assertEqual(self.client.get(f"{API}/users", headers=bearer(token)).status_code, 403)
        self.client.put(
            f"{API}/users/{user['id']}", json={"role": "admin"}, headers=bearer(self.admin)
        )
        self.assertEqual(self.client.get(f"{API}/users", headers=bearer(token)).status_code, 200)

    def test_unknown_user(self) -> None:
        resp = self.client.put(
            f"{API}/users/999", json={"firstName": "Nobody"}, headers=bearer(self.admin)
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "User not found")

    def test_no_fields_and_invalid_role(self) -> None:
        _, user = self.register("plain@tasks.io")
        url = f"{API}/users/{user['id']}"
        resp = self.client.put(url, json={}, headers=bearer(self.admin))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "No fields to update")
        resp = self.client.put(url, json={"role": "superuser"}, headers=bearer(self.admin))
        self.assertEqual(resp.status_code, 400)

    def test_blank_name_rejected(self) -> None:
        _, user = self.register("blank@tasks.io")
        resp = self.client.put(
            f"{API}/users/{user['id']}", json={"lastName": "  "}, headers=bearer(self.admin)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["status"], "error")

    def test_out_of_range_id_rejected(self) -> None:
        resp = self.client.put(
            f"{API}/users/99999999999999999999",
            json={"firstName": "Nobody"},
            headers=bearer(self.admin),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["status"], "error")


if __name__ == "__main__":
    unittest.main()
