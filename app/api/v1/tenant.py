"""Tenant endpoint: landlords and caretakers register tenants."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_mailer, require_permission, require_roles
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse
from app.schemas.property import TenantCreated, TenantCreateRequest
from app.services import properties
from app.services.email import Mailer, send_notification

router = APIRouter()


@router.post(
    "/create",
    response_model=ApiResponse[TenantCreated],
    status_code=status.HTTP_201_CREATED,
)
def create_tenant(
    body: TenantCreateRequest,
    background_tasks: BackgroundTasks,
    _staff: Annotated[CurrentUser, Depends(require_roles("landlord", "caretaker"))],
    current_user: Annotated[CurrentUser, Depends(require_permission("create_tenant"))],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> ApiResponse[TenantCreated]:
    """
    Create a tenant under the authenticated landlord or caretaker.

    Phone number, email and national ID must be unique among the caller's tenants (400).
    The creating user is emailed a notice once the tenant is saved.
    """
    tenant = properties.create_tenant(db, current_user, body)
    background_tasks.add_task(
        send_notification,
        mailer,
        current_user.email,
        f"Welcome to {settings.APP_NAME}!",
        f"Hello {tenant.full_name}",
        "Your tenant account has been created successfully.",
        settings.APP_NAME,
    )
    return ApiResponse(
        status=status.HTTP_201_CREATED,
        message="Tenant profile created successfully",
        data=TenantCreated(
            id=tenant.id,
            full_name=tenant.full_name,
            phone_number=tenant.phone_number,
            property_address=tenant.property_address,
            lease_start_date=tenant.lease_start_date,
            lease_end_date=tenant.lease_end_date,
        ),
    )
