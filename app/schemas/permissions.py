"""Request/response schemas for role permission management."""

from pydantic import BaseModel, Field

from app.schemas.common import RequiredStr


class PermissionGrantRequest(BaseModel):
    """Grant or revoke permission_name for the role with the given name."""

    role: RequiredStr = Field(..., max_length=64, description="Role name, e.g. landlord")
    permission_name: RequiredStr = Field(
        ..., max_length=128, description="Permission name, e.g. create_tenant"
    )


class PermissionGrant(BaseModel):
    role: str
    permission_name: str


class RolePermissions(BaseModel):
    role: str
    permissions: list[str]
