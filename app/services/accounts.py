"""User accounts: registration, confirmation, login and password reset."""

import logging
import re
from datetime import timedelta
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from app.core.errors import (
    AuthorizationError,
    ConflictError,
    InputValidationError,
    NotFoundError,
)
from app.core.security import (
    ACCESS_TOKEN_PURPOSE,
    CONFIRMATION_CODE_LENGTH,
    RESET_TOKEN_PURPOSE,
    USER_ID_LENGTH,
    TokenError,
    TokenService,
    generate_code,
    hash_password,
    verify_password,
)
from app.core.store import store_errors
from app.models import User
from app.schemas.auth import RegisterRequest
from app.services.permissions import assign_role, require_role

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

# Same message for unknown identifier and wrong password.
INCORRECT_CREDENTIALS = "User not found or incorrect credentials"

DUPLICATE_MESSAGES = {
    "email": "Email is already in use.",
    "phone_number": "Phone number is already in use.",
}


def _find_duplicate(db: Session, email: str, phone_number: str) -> str | None:
    """Return the first of email/phone_number already registered, or None."""
    row = db.execute(
        select(User.email, User.phone_number).where(
            or_(User.email == email, User.phone_number == phone_number)
        )
    ).first()
    if row is None:
        return None
    return "email" if row.email == email else "phone_number"


def register_user(db: Session, body: RegisterRequest) -> User:
    """
    Create an unconfirmed user with a generated public id and confirmation code,
    linked to the requested role through user_roles.

    The duplicate pre-check only produces a friendlier error; the unique
    constraints on users are what enforce email and phone uniqueness.
    """
    role = require_role(db, body.role)

    duplicate = _find_duplicate(db, body.email, body.phone_number)
    if duplicate is not None:
        raise ConflictError(DUPLICATE_MESSAGES[duplicate], field=duplicate)

    user = User(
        user_id=generate_code(USER_ID_LENGTH),
        first_name=body.first_name,
        middle_name=body.middle_name or None,
        last_name=body.last_name,
        email=body.email,
        phone_number=body.phone_number,
        role=role.role_name,
        password_hash=hash_password(body.password),
        confirmation_code=generate_code(CONFIRMATION_CODE_LENGTH),
        is_confirmed=False,
    )
    db.add(user)
    with store_errors(
        db,
        user,
        conflict_messages=DUPLICATE_MESSAGES,
        conflict_message="A user with this information already exists.",
    ):
        db.flush()
        assign_role(db, user.id, role)
        db.commit()
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def confirm_user(db: Session, email: str, confirmation_code: str) -> User:
    """Mark the account confirmed. Raises NotFoundError when email and code do not match."""
    user = db.execute(
        select(User).where(User.email == email, User.confirmation_code == confirmation_code)
    ).scalar_one_or_none()
    if user is None:
        raise NotFoundError("Invalid confirmation code or user not found")
    if not user.is_confirmed:
        with store_errors(db, user):
            user.is_confirmed = True
            db.commit()
        logger.info("Confirmed user id=%s", user.id)
    return user


def find_by_identifier(db: Session, identifier: str) -> User | None:
    """Look up a user by email when identifier looks like one, otherwise by phone number."""
    column = User.email if EMAIL_PATTERN.fullmatch(identifier) else User.phone_number
    return db.execute(select(User).where(column == identifier)).scalar_one_or_none()


def access_claims(user: User) -> dict[str, Any]:
    """Identity claims carried by access tokens."""
    return {
        "sub": str(user.id),
        "user_id": user.user_id,
        "email": user.email,
        "phone_number": user.phone_number,
        "role": user.role,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "purpose": ACCESS_TOKEN_PURPOSE,
    }


def authenticate_user(
    db: Session,
    identifier: str,
    password: str,
    tokens: TokenService,
    ttl: timedelta,
) -> tuple[User, str]:
    """
    Verify credentials and issue an access token.

    Unknown identifier and wrong password both raise NotFoundError with the same
    message. A correct password on an unconfirmed account raises AuthorizationError.
    """
    user = find_by_identifier(db, identifier)
    if user is None or not verify_password(password, user.password_hash):
        raise NotFoundError(INCORRECT_CREDENTIALS)
    if not user.is_confirmed:
        raise AuthorizationError(
            "Account not confirmed. Please check your email for confirmation"
        )
    return user, tokens.issue(access_claims(user), ttl)


def issue_reset_token(
    db: Session, email: str, tokens: TokenService, ttl: timedelta
) -> tuple[User, str]:
    """Return (user, reset token). Raises NotFoundError for an unknown email."""
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    token = tokens.issue({"email": user.email, "purpose": RESET_TOKEN_PURPOSE}, ttl)
    return user, token


def reset_password(db: Session, token: str, new_password: str, tokens: TokenService) -> None:
    """
    Replace the password hash of the user named by a reset token.

    Raises InputValidationError for an invalid, expired or non-reset token and
    NotFoundError when the user no longer exists.
    """
    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.info("Rejected password reset token: %s", e.message)
        raise InputValidationError("Invalid or expired token") from e
    email = claims.get("email")
    if claims.get("purpose") != RESET_TOKEN_PURPOSE or not email:
        raise InputValidationError("Invalid or expired token")

    with store_errors(db):
        result = db.execute(
            update(User)
            .where(User.email == email)
            .values(password_hash=hash_password(new_password))
        )
        db.commit()
    if result.rowcount == 0:
        raise NotFoundError("User not found")
    logger.info("Password reset for %s", email)


def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars())
