"""Vendor router - Vendor profiles and onboarding"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from .schemas import VendorOnboard, VendorResponse, VendorUpdate
from .service import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Vendors"])


def get_vendor_service(db: Session = Depends(get_db)) -> VendorService:
    """Dependency injection for VendorService"""
    return VendorService(db)


@router.get("/vendors", response_model=list[VendorResponse])
async def get_vendors(
    current_user: User = Depends(get_current_user),
    service: VendorService = Depends(get_vendor_service),
):
    """All vendors with their user details (admin only)"""
    return [VendorResponse.from_vendor(v) for v in service.list_vendors(current_user)]


@router.get("/vendors/me", response_model=VendorResponse)
async def get_my_vendor_profile(
    current_user: User = Depends(require_roles("vendor")),
    service: VendorService = Depends(get_vendor_service),
):
    """The calling vendor's own profile"""
    return VendorResponse.from_vendor(service.get_my_vendor(current_user))


@router.get("/vendors/{vendor_id}", response_model=VendorResponse)
async def get_vendor(
    vendor_id: int,
    current_user: User = Depends(get_current_user),
    service: VendorService = Depends(get_vendor_service),
):
    return VendorResponse.from_vendor(service.get_vendor(vendor_id, current_user))


@router.patch("/vendors/{vendor_id}", response_model=VendorResponse)
async def update_vendor(
    vendor_id: int,
    data: VendorUpdate,
    current_user: User = Depends(get_current_user),
    service: VendorService = Depends(get_vendor_service),
):
    """Activate/deactivate a vendor or edit their location (admin only)"""
    return VendorResponse.from_vendor(service.update_vendor(vendor_id, data, current_user))


@router.post("/admin/vendors/onboard", response_model=VendorResponse, status_code=201)
async def onboard_vendor(
    data: VendorOnboard,
    current_user: User = Depends(get_current_user),
    service: VendorService = Depends(get_vendor_service),
):
    """Onboard a vendor by phone number (admin only)"""
    return VendorResponse.from_vendor(service.onboard_vendor(data, current_user))
