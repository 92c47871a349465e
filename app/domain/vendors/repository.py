"""Vendor repository - Database operations for vendor profiles"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import User, Vendor


class VendorRepository:
    """Repository for vendor database operations"""

    @staticmethod
    def get_vendors(db: Session) -> list[Vendor]:
        """Get all vendors joined with their user"""
        return (
            db.query(Vendor)
            .options(joinedload(Vendor.user))
            .order_by(Vendor.created_at.desc(), Vendor.id.desc())
            .all()
        )

    @staticmethod
    def get_vendor_by_id(db: Session, vendor_id: int) -> Optional[Vendor]:
        return (
            db.query(Vendor)
            .options(joinedload(Vendor.user))
            .filter(Vendor.id == vendor_id)
            .first()
        )

    @staticmethod
    def get_vendor_by_user(db: Session, user_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.user_id == user_id).first()

    @staticmethod
    def get_user_by_phone(db: Session, phone_number: str) -> Optional[User]:
        return db.query(User).filter(User.phone_number == phone_number).first()

    @staticmethod
    def add_vendor(db: Session, user: User, **vendor_data) -> Vendor:
        """Add a vendor profile for the user to the session (caller commits)"""
        vendor = Vendor(user_id=user.id, **vendor_data)
        db.add(vendor)
        db.flush()
        return vendor

    @staticmethod
    def update_vendor(db: Session, vendor: Vendor, **updates) -> Vendor:
        """Update a vendor with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(vendor, key):
                setattr(vendor, key, value)

        db.commit()
        db.refresh(vendor)
        return vendor
