"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import health, landlord, permissions, tenant, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(landlord.router, prefix="/landlord", tags=["landlords"])
router.include_router(tenant.router, prefix="/tenant", tags=["tenants"])
router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
