"""ORM models for landlord profiles, tenants and properties."""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Landlord(Base):
    """Landlord profile; one per user account with the landlord role."""

    __tablename__ = "landlords"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_landlords_user_id"),
        UniqueConstraint("user_national_id", name="uq_landlords_user_national_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(32), nullable=False)
    user_national_id = Column(String(64), nullable=False)
    property_name = Column(String(255), nullable=False)
    property_type = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    number_of_units = Column(Integer, nullable=False)
    price_range = Column(String(100), nullable=False)
    amenities = Column(JSONType, nullable=False)
    bank_name = Column(String(255), nullable=False)
    account_number = Column(String(64), nullable=False)
    branch = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class Tenant(Base):
    """
    Tenant record created by a landlord or caretaker.

    user_id is the creating user; national id, phone and email are unique per creator.
    """

    __tablename__ = "tenants"
    __table_args__ = (
        UniqueConstraint("user_id", "national_id", name="uq_tenants_user_national_id"),
        UniqueConstraint("user_id", "phone_number", name="uq_tenants_user_phone_number"),
        UniqueConstraint("user_id", "email", name="uq_tenants_user_email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(32), nullable=False)
    national_id = Column(String(64), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    property_address = Column(String(512), nullable=False)
    lease_start_date = Column(Date, nullable=False)
    lease_end_date = Column(Date, nullable=False)
    monthly_rent = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(64), nullable=False)
    security_deposit = Column(Numeric(12, 2), nullable=True)
    tenant_references = Column(JSONType, nullable=True)
    emergency_contact_name = Column(String(255), nullable=True)
    emergency_contact_phone = Column(String(32), nullable=True)
    emergency_contact_relationship = Column(String(64), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        UniqueConstraint("property_unique_id", name="uq_properties_property_unique_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    landlord_id = Column(
        Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True
    )
    property_name = Column(String(255), nullable=False)
    property_type = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    number_of_units = Column(Integer, nullable=False)
    price_range = Column(String(100), nullable=False)
    amenities = Column(JSONType, nullable=False)
    property_unique_id = Column(String(16), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
