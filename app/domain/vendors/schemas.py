"""Vendor domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import normalize_phone, optional_text, require_text, validate_pin_code


class VendorOnboard(BaseModel):
    """Schema for onboarding a vendor (admin only)"""

    name: str
    phone: str
    location: str
    pinCode: str
    district: str
    state: str
    aadharNumber: Optional[str] = None
    panNumber: Optional[str] = None
    active: bool = True

    @field_validator("name", "location", "district", "state")
    @classmethod
    def validate_required(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(require_text(v, "phone"))

    @field_validator("pinCode")
    @classmethod
    def validate_pin(cls, v):
        return validate_pin_code(v)

    @field_validator("aadharNumber", "panNumber")
    @classmethod
    def validate_documents(cls, v):
        return optional_text(v)


class VendorUpdate(BaseModel):
    """Schema for updating a vendor; omitted fields are left as they are"""

    active: Optional[bool] = None
    location: Optional[str] = None
    pinCode: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    aadharNumber: Optional[str] = None
    panNumber: Optional[str] = None

    @field_validator("location", "district", "state")
    @classmethod
    def validate_text(cls, v, info):
        if v is None:
            return v
        return require_text(v, info.field_name)

    @field_validator("pinCode")
    @classmethod
    def validate_pin(cls, v):
        return validate_pin_code(v)


class VendorResponse(BaseModel):
    id: int
    userId: int
    name: Optional[str]
    phone: str
    location: str
    pinCode: Optional[str]
    district: str
    state: str
    aadharNumber: Optional[str]
    panNumber: Optional[str]
    active: bool
    activePickups: int
    createdAt: Optional[datetime]

    @classmethod
    def from_vendor(cls, vendor) -> "VendorResponse":
        return cls(
            id=vendor.id,
            userId=vendor.user_id,
            name=vendor.user.name,
            phone=vendor.user.phone_number,
            location=vendor.location,
            pinCode=vendor.pin_code,
            district=vendor.district,
            state=vendor.state,
            aadharNumber=vendor.aadhar_number,
            panNumber=vendor.pan_number,
            active=vendor.active,
            activePickups=vendor.active_pickups or 0,
            createdAt=vendor.created_at,
        )
