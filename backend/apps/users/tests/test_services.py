import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from apps.api.exceptions import ApplicationError
from apps.auth.identity import Identity
from apps.users.services import UserService

ADMIN = Identity(id=1, username="admin", role="admin")
CUSTOMER = Identity(id=2, username="pasiego", role="usuario")


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeUser:
    def __init__(self, user_id, username, role="usuario", day=1):
        self.id = user_id
        self.username = username
        self.role = role
        self.password = "hashed"
        self.date_joined = datetime(2024, 1, day, tzinfo=timezone.utc)


class FakeUserRepository:
    def __init__(self, users):
        self.storage = {u.id: u for u in users}

    def list(self, **filters):
        return sorted(self.storage.values(), key=lambda u: u.date_joined, reverse=True)

    def get(self, **filters):
        return self.storage.get(filters.get("id"))

    def update(self, obj, **data):
        for key, value in data.items():
            setattr(obj, key, value)
        return obj

    def delete(self, obj):
        self.storage.pop(obj.id, None)


class FakeCartRepository:
    def __init__(self, owners):
        self.owners = set(owners)

    def delete_for_user(self, user_id):
        self.owners.discard(user_id)


class UserServiceTests(unittest.TestCase):
    def setUp(self):
        self.atomic_patcher = patch("apps.users.services.transaction.atomic", DummyAtomic())
        self.atomic_patcher.start()
        self.addCleanup(self.atomic_patcher.stop)
        self.users = FakeUserRepository(
            [
                FakeUser(1, "admin", role="admin", day=1),
                FakeUser(2, "pasiego", day=2),
                FakeUser(3, "lebaniego", day=3),
            ]
        )
        self.carts = FakeCartRepository({2, 3})
        self.service = UserService(users=self.users, carts=self.carts)

    def test_list_users_newest_first_without_password(self):
        data = self.service.list_users(ADMIN)
        self.assertEqual([u.username for u in data], ["lebaniego", "pasiego", "admin"])
        self.assertFalse(hasattr(data[0], "password"))

    def test_non_admin_cannot_list_users(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.list_users(CUSTOMER)
        self.assertEqual(ctx.exception.code, "FORBIDDEN")

    def test_get_user_not_found(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.get_user(ADMIN, 99)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")
        self.assertIsNone(self.service.find_user(ADMIN, 99))

    def test_update_role(self):
        dto = self.service.update_role(ADMIN, 2, "admin")
        self.assertEqual(dto.role, "admin")
        self.assertEqual(self.users.get(id=2).role, "admin")

    def test_update_role_rejects_unknown_role_before_lookup(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.update_role(ADMIN, 99, "superuser")
        self.assertEqual(ctx.exception.code, "BAD_REQUEST")

    def test_update_role_missing_user(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.update_role(ADMIN, 99, "admin")
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_admin_cannot_delete_self(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.delete_user(ADMIN, ADMIN.id)
        self.assertEqual(ctx.exception.code, "BAD_REQUEST")
        self.assertIn(1, self.users.storage)

    def test_delete_user_removes_cart(self):
        self.service.delete_user(ADMIN, 2)
        self.assertNotIn(2, self.users.storage)
        self.assertEqual(self.carts.owners, {3})

    def test_delete_missing_user(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.delete_user(ADMIN, 42)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")
        self.assertEqual(self.carts.owners, {2, 3})

    def test_non_admin_cannot_delete(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.delete_user(CUSTOMER, 3)
        self.assertEqual(ctx.exception.code, "FORBIDDEN")


if __name__ == "__main__":
    unittest.main()
