"""Request/response schemas for landlord, tenant and property endpoints."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.common import OptionalStr, RequiredStr


class LandlordCreateRequest(BaseModel):
    """Landlord profile; identity fields (name, email, phone) come from the token."""

    national_id: RequiredStr = Field(..., max_length=64)
    property_name: RequiredStr = Field(..., max_length=255)
    property_type: RequiredStr = Field(..., max_length=100)
    location: RequiredStr = Field(..., max_length=255)
    number_of_units: int = Field(..., gt=0)
    price_range: RequiredStr = Field(..., max_length=100)
    amenities: dict[str, Any] | list[Any]
    bank_name: RequiredStr = Field(..., max_length=255)
    account_number: RequiredStr = Field(..., max_length=64)
    branch: RequiredStr = Field(..., max_length=255)


class LandlordCreated(BaseModel):
    id: int
    full_name: str
    phone_number: str
    property_name: str
    location: str


class TenantCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tenant_full_name: RequiredStr = Field(..., alias="tenantFullName", max_length=255)
    phone_number: RequiredStr = Field(..., alias="phoneNumber", max_length=32)
    email: OptionalStr = Field(default=None, max_length=255)
    national_id: RequiredStr = Field(..., max_length=64)
    date_of_birth: date
    property_address: RequiredStr = Field(..., max_length=512)
    lease_start_date: date
    lease_end_date: date
    monthly_rent: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_method: RequiredStr = Field(..., max_length=64)
    security_deposit: Decimal | None = Field(
        default=None, ge=0, max_digits=12, decimal_places=2
    )
    tenant_references: list[str] | None = None
    emergency_contact_name: OptionalStr = Field(default=None, max_length=255)
    emergency_contact_number: OptionalStr = Field(default=None, max_length=32)
    emergency_contact_relationship: OptionalStr = Field(default=None, max_length=64)

    @model_validator(mode="after")
    def check_lease_dates(self) -> "TenantCreateRequest":
        if self.lease_end_date < self.lease_start_date:
            raise ValueError("lease_end_date must not be before lease_start_date")
        return self


class TenantCreated(BaseModel):
    id: int
    full_name: str
    phone_number: str
    property_address: str
    lease_start_date: date
    lease_end_date: date


class PropertyCreateRequest(BaseModel):
    property_name: RequiredStr = Field(..., max_length=255)
    property_type: RequiredStr = Field(..., max_length=100)
    location: RequiredStr = Field(..., max_length=255)
    number_of_units: int = Field(..., gt=0)
    price_range: RequiredStr = Field(..., max_length=100)
    amenities: dict[str, Any] | list[Any]


class PropertyCreated(BaseModel):
    id: int
    property_name: str
    property_type: str
    location: str
    property_unique_id: str
