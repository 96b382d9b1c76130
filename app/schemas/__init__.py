"""Pydantic request/response schemas."""

from app.schemas.auth import (
    ConfirmRequest,
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.permissions import PermissionGrantRequest
from app.schemas.property import (
    LandlordCreateRequest,
    PropertyCreateRequest,
    TenantCreateRequest,
)

__all__ = [
    "ApiResponse",
    "ConfirmRequest",
    "CurrentUser",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LandlordCreateRequest",
    "LoginRequest",
    "MessageResponse",
    "PermissionGrantRequest",
    "PropertyCreateRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "TenantCreateRequest",
]
