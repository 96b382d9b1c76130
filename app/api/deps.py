"""Shared dependencies: app-scoped services, bearer authentication and permission checks."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import AuthenticationError, AuthorizationError, StoreError
from app.core.security import ACCESS_TOKEN_PURPOSE, TokenError, TokenService
from app.schemas.auth import CurrentUser
from app.services.email import Mailer
from app.services.permissions import has_permission

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer access token and return its identity.

    The identity is decoded from the token claims (no store lookup) and attached
    to request.state.current_user. Raises 401 if the token is missing or invalid.
    """
    if credentials is None:
        raise AuthenticationError("Unauthorized, token missing")
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.info("Rejected bearer token: %s", e.message)
        raise AuthenticationError("Invalid or expired token") from e
    if claims.get("purpose") != ACCESS_TOKEN_PURPOSE:
        raise AuthenticationError("Invalid token payload")
    try:
        user = CurrentUser(
            id=int(claims.get("sub", "")),
            user_id=claims.get("user_id"),
            email=claims.get("email"),
            phone_number=claims.get("phone_number"),
            role=claims.get("role"),
            first_name=claims.get("first_name"),
            last_name=claims.get("last_name"),
        )
    except (TypeError, ValueError, ValidationError) as e:
        raise AuthenticationError("Invalid token payload") from e
    request.state.current_user = user
    return user


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    """Dependency factory: authenticated user whose role is one of roles, else 403."""

    def _require_roles(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in roles:
            raise AuthorizationError(
                f"Access restricted to role(s): {', '.join(roles)}"
            )
        return current_user

    return _require_roles


def require_permission(permission_name: str) -> Callable[..., CurrentUser]:
    """
    Dependency factory: authenticated user holding permission_name through a role.
    403 when the permission is missing, 500 when the lookup itself fails.
    """

    def _require_permission(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ) -> CurrentUser:
        try:
            allowed = has_permission(db, current_user.id, permission_name)
        except SQLAlchemyError as e:
            logger.exception("Error checking permission %s", permission_name)
            raise StoreError("Something went wrong while checking permissions") from e
        if not allowed:
            raise AuthorizationError()
        return current_user

    return _require_permission
