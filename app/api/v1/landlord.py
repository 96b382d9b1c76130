"""Landlord endpoints: create the landlord profile and add properties under it."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_mailer, require_permission, require_roles
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse
from app.schemas.property import (
    LandlordCreated,
    LandlordCreateRequest,
    PropertyCreated,
    PropertyCreateRequest,
)
from app.services import properties
from app.services.email import Mailer, send_notification

router = APIRouter()


@router.post(
    "/create",
    response_model=ApiResponse[LandlordCreated],
    status_code=status.HTTP_201_CREATED,
)
def create_landlord(
    body: LandlordCreateRequest,
    background_tasks: BackgroundTasks,
    current_user: Annotated[CurrentUser, Depends(require_roles("landlord"))],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> ApiResponse[LandlordCreated]:
    """
    Create the landlord profile of the authenticated landlord.

    Returns 400 when the national ID is already used or the profile exists.
    """
    landlord = properties.create_landlord(db, current_user, body)
    background_tasks.add_task(
        send_notification,
        mailer,
        current_user.email,
        f"Welcome to {settings.APP_NAME}!",
        f"Hello {landlord.full_name}",
        "Your landlord account has been created successfully.",
        settings.APP_NAME,
    )
    return ApiResponse(
        status=status.HTTP_201_CREATED,
        message="Landlord profile created successfully",
        data=LandlordCreated(
            id=landlord.id,
            full_name=landlord.full_name,
            phone_number=landlord.phone_number,
            property_name=landlord.property_name,
            location=landlord.location,
        ),
    )


@router.post(
    "/add",
    response_model=ApiResponse[PropertyCreated],
    status_code=status.HTTP_201_CREATED,
)
def add_property(
    body: PropertyCreateRequest,
    _landlord: Annotated[CurrentUser, Depends(require_roles("landlord"))],
    current_user: Annotated[CurrentUser, Depends(require_permission("create_property"))],
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[PropertyCreated]:
    """Add a property under the authenticated landlord's profile. 403 without a profile."""
    prop = properties.create_property(db, current_user, body)
    return ApiResponse(
        status=status.HTTP_201_CREATED,
        message="Property added successfully",
        data=PropertyCreated(
            id=prop.id,
            property_name=prop.property_name,
            property_type=prop.property_type,
            location=prop.location,
            property_unique_id=prop.property_unique_id,
        ),
    )
