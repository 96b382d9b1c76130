"""Landlord profiles, tenants and properties owned by an authenticated user."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, ConflictError
from app.core.security import PROPERTY_ID_LENGTH, generate_code
from app.core.store import add_and_commit
from app.models import Landlord, Property, Tenant
from app.schemas.auth import CurrentUser
from app.schemas.property import (
    LandlordCreateRequest,
    PropertyCreateRequest,
    TenantCreateRequest,
)

logger = logging.getLogger(__name__)


def create_landlord(db: Session, user: CurrentUser, body: LandlordCreateRequest) -> Landlord:
    """
    Create the landlord profile for user. Name, email and phone are taken from the identity.
    Raises ConflictError (400) for a national id already in use or an existing profile.
    """
    existing = db.execute(
        select(Landlord.id).where(Landlord.user_national_id == body.national_id)
    ).first()
    if existing is not None:
        raise ConflictError(
            "This national ID is already in use by another landlord.",
            field="user_national_id",
            status_code=400,
        )

    landlord = Landlord(
        user_id=user.id,
        full_name=user.full_name,
        email=user.email,
        phone_number=user.phone_number,
        user_national_id=body.national_id,
        property_name=body.property_name,
        property_type=body.property_type,
        location=body.location,
        number_of_units=body.number_of_units,
        price_range=body.price_range,
        amenities=body.amenities,
        bank_name=body.bank_name,
        account_number=body.account_number,
        branch=body.branch,
    )
    add_and_commit(
        db,
        landlord,
        conflict_status=400,
        conflict_message="A landlord with this information already exists",
        failure_message="Something went wrong while creating the landlord profile",
    )
    logger.info("Created landlord profile id=%s for user id=%s", landlord.id, user.id)
    return landlord


def create_tenant(db: Session, user: CurrentUser, body: TenantCreateRequest) -> Tenant:
    """
    Create a tenant under user. Phone, email and national id are unique per creating user.
    """
    matches = [
        Tenant.phone_number == body.phone_number,
        Tenant.national_id == body.national_id,
    ]
    if body.email:
        matches.append(Tenant.email == body.email)
    existing = db.execute(
        select(Tenant.id).where(Tenant.user_id == user.id, or_(*matches)).limit(1)
    ).first()
    if existing is not None:
        raise ConflictError(
            "A tenant with this phone number, email, or national ID already exists.",
            status_code=400,
        )

    tenant = Tenant(
        user_id=user.id,
        full_name=body.tenant_full_name,
        email=body.email or None,
        phone_number=body.phone_number,
        national_id=body.national_id,
        date_of_birth=body.date_of_birth,
        property_address=body.property_address,
        lease_start_date=body.lease_start_date,
        lease_end_date=body.lease_end_date,
        monthly_rent=body.monthly_rent,
        payment_method=body.payment_method,
        security_deposit=body.security_deposit,
        tenant_references=body.tenant_references,
        emergency_contact_name=body.emergency_contact_name,
        emergency_contact_phone=body.emergency_contact_number,
        emergency_contact_relationship=body.emergency_contact_relationship,
    )
    add_and_commit(
        db,
        tenant,
        conflict_status=400,
        conflict_message="A tenant with this information already exists",
        failure_message="Something went wrong while creating the tenant profile",
    )
    logger.info("Created tenant id=%s for user id=%s", tenant.id, user.id)
    return tenant


def get_landlord_for_user(db: Session, user_id: int) -> Landlord | None:
    return db.execute(
        select(Landlord).where(Landlord.user_id == user_id)
    ).scalar_one_or_none()


def create_property(db: Session, user: CurrentUser, body: PropertyCreateRequest) -> Property:
    """
    Add a property under the user's landlord profile.
    Raises AuthorizationError when the user has no landlord profile.
    """
    landlord = get_landlord_for_user(db, user.id)
    if landlord is None:
        raise AuthorizationError("Create a landlord profile before adding properties")

    prop = Property(
        landlord_id=landlord.id,
        property_name=body.property_name,
        property_type=body.property_type,
        location=body.location,
        number_of_units=body.number_of_units,
        price_range=body.price_range,
        amenities=body.amenities,
        property_unique_id=generate_code(PROPERTY_ID_LENGTH),
    )
    add_and_commit(
        db,
        prop,
        conflict_message="A property with this identifier already exists",
        failure_message="Something went wrong",
    )
    logger.info("Created property id=%s for landlord id=%s", prop.id, landlord.id)
    return prop
