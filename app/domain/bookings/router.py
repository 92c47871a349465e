"""Booking router - FastAPI endpoints for the pickup booking lifecycle"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import notify_booking_created
from .schemas import (
    AssignVendorRequest,
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    LocationUpdate,
    PaymentStatusUpdate,
    RejectBookingRequest,
    StatusUpdateRequest,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings visible to the caller, newest first"""
    return [BookingResponse.from_booking(b) for b in service.list_bookings(current_user)]


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Get a single booking with its items"""
    return BookingResponse.from_booking(service.get_booking(booking_id, current_user))


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Create a pickup booking and notify the admin in the background"""
    booking = service.create_booking(data, current_user)

    background_tasks.add_task(notify_booking_created, service.notification_summary(booking))

    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def edit_booking(
    booking_id: int,
    data: BookingUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Edit a pending booking"""
    return BookingResponse.from_booking(service.edit_booking(booking_id, data, current_user))


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Delete a pending booking"""
    return service.delete_booking(booking_id, current_user)


# ============================================================================
# LIFECYCLE TRANSITIONS
# ============================================================================


@router.patch("/{booking_id}/assign", response_model=BookingResponse)
async def assign_vendor(
    booking_id: int,
    data: AssignVendorRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Assign a vendor to a booking (admin only)"""
    booking = service.assign_vendor(booking_id, data.vendorId, current_user)
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Customer cancels an assigned pickup; the booking goes back to pending"""
    return BookingResponse.from_booking(service.cancel_booking(booking_id, current_user))


@router.patch("/{booking_id}/reject", response_model=BookingResponse)
async def reject_booking(
    booking_id: int,
    data: RejectBookingRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Vendor or admin rejects an assigned pickup"""
    booking = service.reject_booking(booking_id, data.reason, current_user)
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Change a booking's status; completing requires a payment mode"""
    booking = service.update_status(booking_id, data, current_user)
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}/location", response_model=BookingResponse)
async def update_vendor_location(
    booking_id: int,
    data: LocationUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Assigned vendor reports their live location"""
    booking = service.update_location(booking_id, data, current_user)
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}/payment-status", response_model=BookingResponse)
async def update_payment_status(
    booking_id: int,
    data: PaymentStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Mark a completed booking as paid or unpaid"""
    booking = service.update_payment_status(booking_id, data.paymentStatus, current_user)
    return BookingResponse.from_booking(booking)
