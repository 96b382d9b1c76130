"""Tests for app.services.permissions against an in-memory database."""

import unittest

from sqlalchemy import delete, select

from app.core.errors import ConflictError, InputValidationError, NotFoundError
from app.core.security import hash_password
from app.models import Permission, Role, RolePermission, User
from app.services.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    assign_role,
    get_role,
    grant_permission,
    has_permission,
    list_role_permissions,
    revoke_permission,
    seed_rbac,
)
from support import StoreTestCase


class PermissionStoreTestCase(StoreTestCase):
    def make_user(self, role_name: str, email: str = "a@x.com", phone: str = "+1") -> User:
        role = get_role(self.db, role_name)
        user = User(
            user_id="ABC123",
            first_name="A",
            last_name="B",
            email=email,
            phone_number=phone,
            role=role_name,
            password_hash=hash_password("secret123"),
            confirmation_code="XYZ999",
            is_confirmed=True,
        )
        self.db.add(user)
        self.db.flush()
        assign_role(self.db, user.id, role)
        self.db.commit()
        return user


class TestSeedRbac(PermissionStoreTestCase):
    def test_default_roles_exist(self) -> None:
        names = set(self.db.execute(select(Role.role_name)).scalars())
        self.assertEqual(names, set(DEFAULT_ROLE_PERMISSIONS))

    def test_idempotent(self) -> None:
        self.assertEqual(seed_rbac(self.db), (0, 0))

    def test_custom_mapping_adds_only_new(self) -> None:
        roles, grants = seed_rbac(self.db, {"landlord": ("create_tenant", "view_reports")})
        self.assertEqual((roles, grants), (0, 1))


class TestHasPermission(PermissionStoreTestCase):
    def test_granted_through_role(self) -> None:
        user = self.make_user("landlord")
        self.assertTrue(has_permission(self.db, user.id, "create_tenant"))

    def test_not_granted(self) -> None:
        user = self.make_user("caretaker")
        self.assertFalse(has_permission(self.db, user.id, "create_property"))

    def test_unknown_user(self) -> None:
        self.assertFalse(has_permission(self.db, 999, "create_tenant"))

    def test_deleting_grant_revokes(self) -> None:
        user = self.make_user("landlord")
        perm_id = self.db.execute(
            select(Permission.id).where(Permission.permission_name == "create_tenant")
        ).scalar_one()
        self.db.execute(delete(RolePermission).where(RolePermission.permission_id == perm_id))
        self.db.commit()
        self.assertFalse(has_permission(self.db, user.id, "create_tenant"))


class TestGrantAndRevoke(PermissionStoreTestCase):
    def test_grant_new_permission(self) -> None:
        user = self.make_user("tenant")
        self.assertFalse(has_permission(self.db, user.id, "view_dashboard"))
        grant_permission(self.db, "tenant", "view_dashboard")
        self.assertTrue(has_permission(self.db, user.id, "view_dashboard"))

    def test_grant_unknown_role(self) -> None:
        with self.assertRaises(InputValidationError):
            grant_permission(self.db, "janitor", "view_dashboard")

    def test_grant_twice_conflicts(self) -> None:
        with self.assertRaises(ConflictError) as ctx:
            grant_permission(self.db, "landlord", "create_tenant")
        self.assertEqual(ctx.exception.status_code, 409)

    def test_revoke(self) -> None:
        user = self.make_user("landlord")
        revoke_permission(self.db, "landlord", "create_tenant")
        self.assertFalse(has_permission(self.db, user.id, "create_tenant"))
        self.assertTrue(has_permission(self.db, user.id, "create_property"))

    def test_revoke_missing_grant(self) -> None:
        with self.assertRaises(NotFoundError):
            revoke_permission(self.db, "tenant", "create_tenant")

    def test_list_role_permissions(self) -> None:
        self.assertEqual(
            list_role_permissions(self.db, "landlord"), ["create_property", "create_tenant"]
        )
        with self.assertRaises(NotFoundError):
            list_role_permissions(self.db, "janitor")


class TestRoleColumns(PermissionStoreTestCase):
    def test_user_role_fits_any_role_name(self) -> None:
        self.assertEqual(
            User.__table__.c.role.type.length, Role.__table__.c.role_name.type.length
        )

    def test_user_with_long_role_name(self) -> None:
        long_name = "regional_property_portfolio_supervisor_x"
        seed_rbac(self.db, {long_name: ("create_tenant",)})
        user = self.make_user(long_name)
        self.assertEqual(user.role, long_name)
        self.assertTrue(has_permission(self.db, user.id, "create_tenant"))


if __name__ == "__main__":
    unittest.main()
