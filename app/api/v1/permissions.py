"""Permission management: grant and revoke role permissions."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_permission
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.permissions import PermissionGrant, PermissionGrantRequest, RolePermissions
from app.services import permissions

router = APIRouter()

ManagePermissions = Annotated[CurrentUser, Depends(require_permission("manage_permissions"))]


@router.post("/add-permission", response_model=ApiResponse[PermissionGrant])
def add_permission(
    body: PermissionGrantRequest,
    _admin: ManagePermissions,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[PermissionGrant]:
    """
    Grant a permission to a role. The permission is created if it does not exist yet.
    400 for an unknown role, 409 if the role already has the permission.
    """
    permissions.grant_permission(db, body.role, body.permission_name)
    return ApiResponse(
        status=status.HTTP_200_OK,
        message="Permission added to the role successfully.",
        data=PermissionGrant(role=body.role, permission_name=body.permission_name),
    )


@router.post("/revoke-permission", response_model=MessageResponse)
def revoke_permission(
    body: PermissionGrantRequest,
    _admin: ManagePermissions,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Remove a permission from a role. 404 if the role does not have it."""
    permissions.revoke_permission(db, body.role, body.permission_name)
    return MessageResponse(
        status=status.HTTP_200_OK,
        message="Permission removed from the role successfully.",
    )


@router.get("/roles/{role}", response_model=ApiResponse[RolePermissions])
def get_role_permissions(
    role: str,
    _admin: ManagePermissions,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[RolePermissions]:
    names = permissions.list_role_permissions(db, role)
    return ApiResponse(
        status=status.HTTP_200_OK,
        message="OK",
        data=RolePermissions(role=role, permissions=names),
    )
