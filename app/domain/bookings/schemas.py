"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...models import Booking
from ...shared.validators import format_money, normalize_phone, require_text, validate_pin_code
from .lifecycle import COMPLETED, PAYMENT_MODES, PAYMENT_STATUSES, REJECTED, STATUSES

MAX_QUANTITY = 1_000_000


class BookingItemInput(BaseModel):
    """One line of a pickup request"""

    categoryId: int
    categoryName: Optional[str] = None
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    rate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    # Client-computed value; recomputed server-side as rate x quantity
    value: Optional[Decimal] = None


class BookingCreate(BaseModel):
    """Schema for creating a new booking"""

    customerName: str
    customerPhone: str
    customerAddress: str
    pinCode: str
    district: str
    state: str
    items: list[BookingItemInput] = Field(..., min_length=1)
    # Client-computed total; recomputed server-side from the items
    totalValue: Optional[Decimal] = None

    @field_validator("customerName", "customerAddress", "district", "state")
    @classmethod
    def validate_required(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("customerPhone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(require_text(v, "customerPhone"))

    @field_validator("pinCode")
    @classmethod
    def validate_pin(cls, v):
        return validate_pin_code(v)


class BookingUpdate(BaseModel):
    """Schema for editing a pending booking; omitted fields are left as they are"""

    customerName: Optional[str] = None
    customerPhone: Optional[str] = None
    customerAddress: Optional[str] = None
    pinCode: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    items: Optional[list[BookingItemInput]] = Field(None, min_length=1)
    totalValue: Optional[Decimal] = None

    @field_validator("customerName", "customerAddress", "district", "state")
    @classmethod
    def validate_required(cls, v, info):
        if v is None:
            return v
        return require_text(v, info.field_name)

    @field_validator("customerPhone")
    @classmethod
    def validate_phone(cls, v):
        if v is None:
            return v
        return normalize_phone(require_text(v, "customerPhone"))

    @field_validator("pinCode")
    @classmethod
    def validate_pin(cls, v):
        return validate_pin_code(v)


class AssignVendorRequest(BaseModel):
    vendorId: int


class RejectBookingRequest(BaseModel):
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v):
        return require_text(v, "reason")


class StatusUpdateRequest(BaseModel):
    """Generic status change; paymentMode is required exactly when completing"""

    status: str
    paymentMode: Optional[str] = None
    rejectionReason: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in STATUSES:
            raise ValueError(f"status must be one of {', '.join(STATUSES)}")
        return v

    @field_validator("paymentMode")
    @classmethod
    def validate_payment_mode(cls, v):
        if v is not None and v not in PAYMENT_MODES:
            raise ValueError(f"paymentMode must be one of {', '.join(PAYMENT_MODES)}")
        return v

    @model_validator(mode="after")
    def check_payment_mode(self):
        if self.status == COMPLETED and not self.paymentMode:
            raise ValueError("paymentMode is required to complete a booking")
        if self.status != COMPLETED and self.paymentMode:
            raise ValueError("paymentMode can only be set when completing a booking")
        if self.status == REJECTED:
            self.rejectionReason = require_text(self.rejectionReason, "rejectionReason")
        return self


class LocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class PaymentStatusUpdate(BaseModel):
    paymentStatus: str

    @field_validator("paymentStatus")
    @classmethod
    def validate_payment_status(cls, v):
        if v not in PAYMENT_STATUSES:
            raise ValueError(f"paymentStatus must be one of {', '.join(PAYMENT_STATUSES)}")
        return v


class BookingItemResponse(BaseModel):
    id: int
    categoryId: int
    categoryName: str
    quantity: int
    rate: str
    value: str


class VendorSummary(BaseModel):
    id: int
    name: str
    phone: str


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    referenceId: str
    customerId: int
    customerName: str
    customerPhone: str
    customerAddress: str
    pinCode: Optional[str]
    district: Optional[str]
    state: Optional[str]
    totalValue: str
    paymentMode: Optional[str]
    paymentStatus: str
    status: str
    rejectionReason: Optional[str]
    vendorId: Optional[int]
    vendorLatitude: Optional[float]
    vendorLongitude: Optional[float]
    createdAt: Optional[datetime]
    completedAt: Optional[datetime]
    items: list[BookingItemResponse]
    vendor: Optional[VendorSummary] = None

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        vendor = None
        if booking.vendor and booking.vendor.user:
            vendor = VendorSummary(
                id=booking.vendor.id,
                name=booking.vendor.user.display_name,
                phone=booking.vendor.user.phone_number,
            )

        return cls(
            id=booking.id,
            referenceId=booking.reference_id,
            customerId=booking.customer_id,
            customerName=booking.customer_name,
            customerPhone=booking.customer_phone,
            customerAddress=booking.customer_address,
            pinCode=booking.pin_code,
            district=booking.district,
            state=booking.state,
            totalValue=format_money(booking.total_value),
            paymentMode=booking.payment_mode,
            paymentStatus=booking.payment_status,
            status=booking.status,
            rejectionReason=booking.rejection_reason,
            vendorId=booking.vendor_id,
            vendorLatitude=booking.vendor_latitude,
            vendorLongitude=booking.vendor_longitude,
            createdAt=booking.created_at,
            completedAt=booking.completed_at,
            items=[
                BookingItemResponse(
                    id=item.id,
                    categoryId=item.category_id,
                    categoryName=item.category_name,
                    quantity=item.quantity,
                    rate=format_money(item.rate),
                    value=format_money(item.value),
                )
                for item in booking.items
            ],
            vendor=vendor,
        )
