"""Role/permission lookups and grants (RBAC over roles, permissions, user_roles)."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, InputValidationError, NotFoundError
from app.core.store import store_errors
from app.models import Permission, Role, RolePermission, UserRole

logger = logging.getLogger(__name__)

# Roles and grants created by seed_rbac. Registration accepts only existing roles.
DEFAULT_ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "super_admin": ("manage_permissions", "view_users"),
    "landlord": ("create_tenant", "create_property"),
    "caretaker": ("create_tenant",),
    "tenant": (),
}


def has_permission(db: Session, user_id: int, permission_name: str) -> bool:
    """
    True iff a role assigned to user_id has been granted permission_name.

    Joins permissions -> role_permissions -> roles -> user_roles on every call.
    """
    stmt = (
        select(Permission.id)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(Role, Role.id == RolePermission.role_id)
        .join(UserRole, UserRole.role_id == Role.id)
        .where(UserRole.user_id == user_id, Permission.permission_name == permission_name)
        .limit(1)
    )
    return db.execute(stmt).first() is not None


def get_role(db: Session, role_name: str) -> Role | None:
    return db.execute(select(Role).where(Role.role_name == role_name)).scalar_one_or_none()


def require_role(db: Session, role_name: str) -> Role:
    """Return the role or raise InputValidationError when it does not exist."""
    role = get_role(db, role_name)
    if role is None:
        raise InputValidationError("Invalid role. Please provide a valid role.")
    return role


def _get_or_create_permission(db: Session, permission_name: str) -> Permission:
    permission = db.execute(
        select(Permission).where(Permission.permission_name == permission_name)
    ).scalar_one_or_none()
    if permission is None:
        permission = Permission(permission_name=permission_name)
        db.add(permission)
        db.flush()
    return permission


def grant_permission(db: Session, role_name: str, permission_name: str) -> RolePermission:
    """
    Grant permission_name to role_name, creating the permission if needed.
    Raises InputValidationError for an unknown role, ConflictError if already granted.
    """
    role = require_role(db, role_name)
    conflict = f"Role '{role_name}' already has permission '{permission_name}'."
    grant = RolePermission(role_id=role.id)
    with store_errors(
        db,
        grant,
        conflict_message=conflict,
        failure_message="Error adding permission to the role.",
    ):
        permission = _get_or_create_permission(db, permission_name)
        existing = db.execute(
            select(RolePermission.id).where(
                RolePermission.role_id == role.id,
                RolePermission.permission_id == permission.id,
            )
        ).first()
        if existing is not None:
            db.rollback()
            raise ConflictError(conflict, field="permission_id")
        grant.permission_id = permission.id
        db.add(grant)
        db.commit()
    logger.info("Granted permission %s to role %s", permission_name, role_name)
    return grant


def revoke_permission(db: Session, role_name: str, permission_name: str) -> None:
    """Delete the grant. Raises InputValidationError for an unknown role, NotFoundError if not granted."""
    role = require_role(db, role_name)
    permission_ids = select(Permission.id).where(Permission.permission_name == permission_name)
    with store_errors(db, failure_message="Error removing permission from the role."):
        result = db.execute(
            delete(RolePermission).where(
                RolePermission.role_id == role.id,
                RolePermission.permission_id.in_(permission_ids),
            )
        )
        db.commit()
    if result.rowcount == 0:
        raise NotFoundError(
            f"Role '{role_name}' does not have permission '{permission_name}'."
        )
    logger.info("Revoked permission %s from role %s", permission_name, role_name)


def list_role_permissions(db: Session, role_name: str) -> list[str]:
    role = get_role(db, role_name)
    if role is None:
        raise NotFoundError(f"Role '{role_name}' not found.")
    stmt = (
        select(Permission.permission_name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .where(RolePermission.role_id == role.id)
        .order_by(Permission.permission_name)
    )
    return list(db.execute(stmt).scalars())


def assign_role(db: Session, user_id: int, role: Role) -> UserRole:
    """Add a user_roles row; caller commits."""
    link = UserRole(user_id=user_id, role_id=role.id)
    db.add(link)
    return link


def seed_rbac(
    db: Session, role_permissions: dict[str, tuple[str, ...]] | None = None
) -> tuple[int, int]:
    """
    Create default roles, permissions and grants. Idempotent: existing rows are kept.

    Returns (roles_created, grants_created).
    """
    mapping = role_permissions if role_permissions is not None else DEFAULT_ROLE_PERMISSIONS
    roles_created = 0
    grants_created = 0
    for role_name, permission_names in mapping.items():
        role = get_role(db, role_name)
        if role is None:
            role = Role(role_name=role_name)
            db.add(role)
            db.flush()
            roles_created += 1
        for permission_name in permission_names:
            permission = _get_or_create_permission(db, permission_name)
            exists = db.execute(
                select(RolePermission.id).where(
                    RolePermission.role_id == role.id,
                    RolePermission.permission_id == permission.id,
                )
            ).first()
            if exists is None:
                db.add(RolePermission(role_id=role.id, permission_id=permission.id))
                grants_created += 1
    db.commit()
    logger.info("RBAC seed: roles_created=%s grants_created=%s", roles_created, grants_created)
    return roles_created, grants_created
