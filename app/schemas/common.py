"""Shared schema building blocks: the response envelope and field types."""

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field, StringConstraints

T = TypeVar("T")

# Required text field: absent, null and blank values are all reported as missing.
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalStr = Annotated[str, StringConstraints(strip_whitespace=True)] | None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every JSON response: {status, message, data}."""

    status: int = Field(..., description="HTTP status code, repeated in the body")
    message: str = Field(..., description="Human-readable outcome")
    data: T | None = Field(default=None, description="Endpoint-specific payload")


class MessageResponse(BaseModel):
    """Envelope without data."""

    status: int
    message: str
