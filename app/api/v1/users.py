"""User account endpoints: register, confirm, login, password reset, and user listing."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import (
    get_app_settings,
    get_current_user,
    get_mailer,
    get_token_service,
    require_permission,
)
from app.core.config import Settings
from app.core.database import get_db
from app.core.security import TokenService
from app.schemas.auth import (
    ConfirmedUser,
    ConfirmRequest,
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResult,
    RegisteredUser,
    RegisterRequest,
    ResetPasswordRequest,
    UserListItem,
    UsersListResponse,
)
from app.schemas.common import ApiResponse, MessageResponse
from app.services import accounts
from app.services.email import Mailer, send_notification

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[RegisteredUser],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> ApiResponse[RegisteredUser]:
    """
    Create a new, unconfirmed user account for an existing role.

    A welcome email carrying the confirmation code is sent in the background;
    delivery failures are logged and do not affect the response.
    Returns 409 when the email or phone number is already registered.
    """
    user = accounts.register_user(db, body)
    background_tasks.add_task(
        send_notification,
        mailer,
        user.email,
        f"Welcome to {settings.APP_NAME}! Confirm Your Account",
        f"Hello {user.first_name} {user.last_name}",
        (
            "Your account has been created successfully. "
            f"Your account ID is {user.user_id}. "
            f"Please confirm your account using this code: {user.confirmation_code}"
        ),
        settings.APP_NAME,
    )
    return ApiResponse(
        status=status.HTTP_201_CREATED,
        message="User created successfully",
        data=RegisteredUser(
            id=user.id,
            user_id=user.user_id,
            role=user.role,
            confirmation_code=user.confirmation_code,
        ),
    )


@router.post("/confirm", response_model=ApiResponse[ConfirmedUser])
def confirm(
    body: ConfirmRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ConfirmedUser]:
    """Confirm an account with the emailed code. 404 when the email/code pair does not match."""
    user = accounts.confirm_user(db, body.email, body.confirmation_code)
    return ApiResponse(
        status=status.HTTP_200_OK,
        message="Account confirmed successfully",
        data=ConfirmedUser(email=user.email, is_confirmed=True),
    )


@router.post("/login", response_model=ApiResponse[LoginResult])
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> ApiResponse[LoginResult]:
    """
    Authenticate with email or phone number and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = accounts.authenticate_user(
        db,
        body.identifier,
        body.password,
        tokens,
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
    return ApiResponse(
        status=status.HTTP_200_OK,
        message="Login successful",
        data=LoginResult(
            user_id=user.user_id,
            email=user.email,
            phone_number=user.phone_number,
            token=token,
        ),
    )


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> MessageResponse:
    """Email a password reset link carrying a short-lived reset token."""
    user, token = accounts.issue_reset_token(
        db,
        body.email,
        tokens,
        timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES),
    )
    reset_link = f"{settings.FRONTEND_URL}/reset-password?token={token}"
    background_tasks.add_task(
        send_notification,
        mailer,
        user.email,
        "Password Reset Request",
        f"Hello {user.first_name}",
        f"Click the following link to reset your password: {reset_link}",
        settings.APP_NAME,
    )
    return MessageResponse(status=status.HTTP_200_OK, message="Password reset email sent")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> MessageResponse:
    """Set a new password using a reset token. 400 for an invalid or expired token."""
    accounts.reset_password(db, body.token, body.new_password, tokens)
    return MessageResponse(
        status=status.HTTP_200_OK, message="Password has been reset successfully"
    )


@router.get("/me", response_model=ApiResponse[CurrentUser])
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse[CurrentUser]:
    return ApiResponse(status=status.HTTP_200_OK, message="OK", data=current_user)


@router.get("", response_model=ApiResponse[UsersListResponse])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_permission("view_users"))],
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UsersListResponse]:
    """List all users without secrets (requires the view_users permission)."""
    users = accounts.list_users(db)
    return ApiResponse(
        status=status.HTTP_200_OK,
        message="OK",
        data=UsersListResponse(users=[UserListItem.model_validate(u) for u in users]),
    )
