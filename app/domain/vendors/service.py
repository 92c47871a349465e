"""Vendor service - Onboarding and managing vendor profiles"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import User, Vendor
from ...permissions import authorize
from .repository import VendorRepository
from .schemas import VendorOnboard, VendorUpdate

logger = logging.getLogger(__name__)

# Placeholder for vendor location fields the user profile does not supply
UNSPECIFIED = "Not provided"


class VendorService:
    """Service layer for vendor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VendorRepository()

    def list_vendors(self, user: User) -> list[Vendor]:
        authorize(user, "vendor.manage")
        return self.repo.get_vendors(self.db)

    def get_vendor(self, vendor_id: int, user: User) -> Vendor:
        authorize(user, "vendor.manage")
        vendor = self.repo.get_vendor_by_id(self.db, vendor_id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        return vendor

    def get_my_vendor(self, user: User) -> Vendor:
        """The vendor profile of the calling vendor"""
        vendor = self.repo.get_vendor_by_user(self.db, user.id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor profile not found")
        return vendor

    def provision_vendor_profile(self, user: User) -> Vendor:
        """
        Stage a vendor profile for a user being promoted to vendor.

        Location fields come from the user's profile. Nothing is committed so the
        caller can commit it together with the role change.
        """
        existing = self.repo.get_vendor_by_user(self.db, user.id)
        if existing:
            return existing

        vendor = self.repo.add_vendor(
            self.db,
            user,
            location=user.address or UNSPECIFIED,
            pin_code=user.pin_code,
            district=user.district or UNSPECIFIED,
            state=user.state or UNSPECIFIED,
            active=True,
            active_pickups=0,
        )
        logger.info(f"🧰 Vendor profile staged for user {user.id}")
        return vendor

    def onboard_vendor(self, data: VendorOnboard, user: User) -> Vendor:
        """Find or create the user by phone, make them a vendor and create their profile"""
        authorize(user, "vendor.manage")

        vendor_user = self.repo.get_user_by_phone(self.db, data.phone)
        if vendor_user and self.repo.get_vendor_by_user(self.db, vendor_user.id):
            raise HTTPException(status_code=409, detail="Vendor profile already exists for this phone")

        try:
            if vendor_user is None:
                vendor_user = User(phone_number=data.phone, name=data.name, role="vendor")
                self.db.add(vendor_user)
                self.db.flush()
            else:
                vendor_user.name = data.name
                vendor_user.role = "vendor"

            vendor = self.repo.add_vendor(
                self.db,
                vendor_user,
                location=data.location,
                pin_code=data.pinCode,
                district=data.district,
                state=data.state,
                aadhar_number=data.aadharNumber,
                pan_number=data.panNumber,
                active=data.active,
                active_pickups=0,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent onboarding for phone {data.phone}")
            raise HTTPException(
                status_code=409, detail="Vendor profile already exists for this phone"
            ) from e

        logger.info(f"✅ Vendor {vendor.id} onboarded for user {vendor_user.id} by admin {user.id}")
        return self.repo.get_vendor_by_id(self.db, vendor.id)

    def update_vendor(self, vendor_id: int, data: VendorUpdate, user: User) -> Vendor:
        """Toggle a vendor's active flag or edit their location fields"""
        vendor = self.get_vendor(vendor_id, user)

        vendor = self.repo.update_vendor(
            self.db,
            vendor,
            active=data.active,
            location=data.location,
            pin_code=data.pinCode,
            district=data.district,
            state=data.state,
            aadhar_number=data.aadharNumber,
            pan_number=data.panNumber,
        )
        logger.info(f"✏️ Vendor {vendor.id} updated by admin {user.id}")
        return vendor
