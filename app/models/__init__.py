"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.property import Landlord, Property, Tenant
from app.models.user import Permission, Role, RolePermission, User, UserRole

__all__ = [
    "Base",
    "Landlord",
    "Permission",
    "Property",
    "Role",
    "RolePermission",
    "Tenant",
    "User",
    "UserRole",
]
