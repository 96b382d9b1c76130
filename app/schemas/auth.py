"""Request/response schemas for user account and auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.common import OptionalStr, RequiredStr


class RegisterRequest(BaseModel):
    """New account details."""

    first_name: RequiredStr = Field(..., max_length=100)
    middle_name: OptionalStr = Field(default=None, max_length=100)
    last_name: RequiredStr = Field(..., max_length=100)
    email: EmailStr
    phone_number: RequiredStr = Field(..., max_length=32)
    role: RequiredStr = Field(..., max_length=64)
    password: RequiredStr = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class RegisteredUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: str = Field(..., alias="userId")
    role: str
    confirmation_code: str = Field(..., alias="confirmationCode")


class ConfirmRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: RequiredStr
    confirmation_code: RequiredStr = Field(..., alias="confirmationCode")


class ConfirmedUser(BaseModel):
    email: str
    is_confirmed: bool


class LoginRequest(BaseModel):
    """Credentials for login. identifier is an email address or a phone number."""

    identifier: RequiredStr = Field(..., max_length=255)
    password: RequiredStr = Field(..., max_length=PASSWORD_MAX_LEN)


class LoginResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str
    phone_number: str
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    token_type: str = "bearer"


class ForgotPasswordRequest(BaseModel):
    email: RequiredStr


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: RequiredStr
    new_password: RequiredStr = Field(
        ...,
        alias="newPassword",
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
    )


class CurrentUser(BaseModel):
    """Authenticated identity decoded from the bearer token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    email: str
    phone_number: str
    role: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserListItem(BaseModel):
    """User entry for the admin list (no password or confirmation code)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    first_name: str
    middle_name: str | None = None
    last_name: str
    email: str
    phone_number: str
    role: str
    is_confirmed: bool


class UsersListResponse(BaseModel):
    users: list[UserListItem]
