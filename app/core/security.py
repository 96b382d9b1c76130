"""Password hashing, random codes, and the JWT token service."""

import secrets
import string
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Length of generated public user ids and confirmation codes.
USER_ID_LENGTH = 6
CONFIRMATION_CODE_LENGTH = 6
PROPERTY_ID_LENGTH = 10

CODE_ALPHABET = string.ascii_uppercase + string.digits

# Value of the "purpose" claim; keeps reset tokens from being used as bearer tokens.
ACCESS_TOKEN_PURPOSE = "access"
RESET_TOKEN_PURPOSE = "password_reset"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_code(length: int) -> str:
    """Random uppercase alphanumeric code (public ids, confirmation codes)."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


class TokenError(Exception):
    """Base for token verification failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidTokenError(TokenError):
    """Token is malformed or cannot be decoded."""


class InvalidSignatureError(InvalidTokenError):
    """Token signature does not match the configured secret."""


class TokenExpiredError(TokenError):
    """Token expiry has passed."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issue and verify signed, time-limited tokens.

    Expiry is checked against the injected clock rather than PyJWT's wall clock,
    so issue/verify are deterministic under a fixed secret and clock.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, claims: dict[str, Any], ttl: timedelta) -> str:
        """Return a signed token carrying claims plus iat and exp."""
        now = self._clock()
        payload: dict[str, Any] = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode token and return its claims.
        Raises InvalidSignatureError, TokenExpiredError or InvalidTokenError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp"]},
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError("Token signature is invalid") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Token could not be decoded: {e!s}") from e

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError("Token expiry claim is invalid")
        if self._clock().timestamp() >= exp:
            raise TokenExpiredError("Token has expired")
        return payload
