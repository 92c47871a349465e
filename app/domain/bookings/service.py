"""Booking service - Lifecycle rules for pickup bookings"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import BOOKING_REFERENCE_PREFIX, BOOKING_REFERENCE_START
from ...models import Booking, BookingItem, User, Vendor
from ...permissions import authorize, is_allowed
from ...shared.validators import MAX_MONEY, format_money, to_money
from ..invoices.service import InvoiceService
from .lifecycle import (
    ASSIGNED,
    COMPLETED,
    PENDING,
    REJECTED,
    build_reference_id,
    ensure_status,
    ensure_transition,
    item_value,
    total_of,
)
from .repository import BookingRepository
from .schemas import (
    BookingCreate,
    BookingItemInput,
    BookingUpdate,
    LocationUpdate,
    StatusUpdateRequest,
)

logger = logging.getLogger(__name__)

REFERENCE_ID_ATTEMPTS = 3


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.invoices = InvoiceService(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_bookings(self, user: User) -> list[Booking]:
        """Bookings visible to the caller: all for admins, assigned for vendors, own for customers"""
        if is_allowed(user, "booking.list_all"):
            return self.repo.get_all_bookings(self.db)
        if user.role == "vendor":
            if not user.vendor:
                return []
            return self.repo.get_bookings_by_vendor(self.db, user.vendor.id)
        return self.repo.get_bookings_by_customer(self.db, user.id)

    def _load(self, booking_id: int) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def get_booking(self, booking_id: int, user: User, action: str = "booking.view") -> Booking:
        """Load a booking and check the caller may perform the action on it"""
        booking = self._load(booking_id)
        authorize(user, action, booking)
        return booking

    # ------------------------------------------------------------------
    # Creation and editing
    # ------------------------------------------------------------------

    def _build_items(self, items: list[BookingItemInput]) -> list[BookingItem]:
        """Turn request lines into BookingItem rows, recomputing each value"""
        categories = self.repo.get_categories_by_ids(self.db, {i.categoryId for i in items})

        rows = []
        for line in items:
            category = categories.get(line.categoryId)
            if not category:
                raise HTTPException(status_code=400, detail=f"Unknown category: {line.categoryId}")

            value = item_value(line.rate, line.quantity)
            if line.value is not None and to_money(line.value) != value:
                logger.warning(
                    f"⚠️ Client value {line.value} for {category.name} differs from "
                    f"{line.rate} x {line.quantity} = {value}; using computed value"
                )

            rows.append(
                BookingItem(
                    category_id=category.id,
                    category_name=category.name,
                    quantity=line.quantity,
                    rate=to_money(line.rate),
                    value=value,
                )
            )

        if total_of(row.value for row in rows) > MAX_MONEY:
            raise HTTPException(status_code=400, detail=f"Booking total cannot exceed {MAX_MONEY}")
        return rows

    @staticmethod
    def _check_client_total(client_total, computed) -> None:
        if client_total is not None and to_money(client_total) != computed:
            logger.warning(
                f"⚠️ Client totalValue {client_total} differs from item sum {computed}; "
                "using item sum"
            )

    def create_booking(self, data: BookingCreate, user: User) -> Booking:
        """Create a pending booking for the caller"""
        authorize(user, "booking.create")

        items = self._build_items(data.items)
        total_value = total_of(item.value for item in items)
        self._check_client_total(data.totalValue, total_value)

        booking_data = {
            "customer_name": data.customerName,
            "customer_phone": data.customerPhone,
            "customer_address": data.customerAddress,
            "pin_code": data.pinCode,
            "district": data.district,
            "state": data.state,
            "total_value": total_value,
            "status": PENDING,
            "payment_status": "unpaid",
            "vendor_id": None,
        }

        for attempt in range(1, REFERENCE_ID_ATTEMPTS + 1):
            reference_id = build_reference_id(
                BOOKING_REFERENCE_PREFIX,
                self.repo.get_last_reference_id(self.db, BOOKING_REFERENCE_PREFIX),
                BOOKING_REFERENCE_START,
            )
            try:
                booking = self.repo.create_booking(
                    self.db, user, items, reference_id=reference_id, **booking_data
                )
                self.db.commit()
                break
            except IntegrityError:
                # Another booking took the same reference id
                self.db.rollback()
                logger.warning(f"⚠️ Reference id {reference_id} taken (attempt {attempt})")
                items = self._build_items(data.items)
        else:
            raise HTTPException(status_code=409, detail="Could not allocate a booking reference")

        logger.info(
            f"📦 Booking {booking.reference_id} created by user {user.id} "
            f"({len(items)} items, total {total_value})"
        )
        return self._load(booking.id)

    def edit_booking(self, booking_id: int, data: BookingUpdate, user: User) -> Booking:
        """Edit contact details and/or replace the items of a pending booking"""
        booking = self.get_booking(booking_id, user, "booking.edit")
        ensure_status(booking.status, [PENDING], "edit")

        updates = {
            "customer_name": data.customerName,
            "customer_phone": data.customerPhone,
            "customer_address": data.customerAddress,
            "pin_code": data.pinCode,
            "district": data.district,
            "state": data.state,
        }
        for key, value in updates.items():
            if value is not None:
                setattr(booking, key, value)

        if data.items is not None:
            items = self._build_items(data.items)
            self.repo.replace_items(self.db, booking, items)
            booking.total_value = total_of(item.value for item in items)
            self._check_client_total(data.totalValue, booking.total_value)

        self.db.commit()
        logger.info(f"✏️ Booking {booking.reference_id} edited by user {user.id}")
        return self._load(booking.id)

    def delete_booking(self, booking_id: int, user: User) -> dict:
        """Delete a pending booking and its items"""
        booking = self.get_booking(booking_id, user, "booking.delete")
        ensure_status(booking.status, [PENDING], "delete")

        reference_id = booking.reference_id
        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking {reference_id} deleted by user {user.id}")
        return {"message": "Booking deleted"}

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    @staticmethod
    def _release_pickup(vendor: Optional[Vendor]) -> None:
        if vendor is not None:
            vendor.active_pickups = max((vendor.active_pickups or 0) - 1, 0)

    def assign_vendor(self, booking_id: int, vendor_id: int, user: User) -> Booking:
        """Assign (or re-assign) a vendor to a booking"""
        booking = self.get_booking(booking_id, user, "booking.assign")

        vendor = self.repo.get_vendor_by_id(self.db, vendor_id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        if not vendor.active:
            raise HTTPException(status_code=409, detail="Vendor is not active")
        # A demoted vendor keeps its profile row but can no longer work bookings
        if vendor.user is None or vendor.user.role != "vendor":
            raise HTTPException(status_code=409, detail="Vendor's user no longer has the vendor role")

        ensure_transition(booking.status, ASSIGNED)

        previous = booking.vendor
        if previous is None or previous.id != vendor.id:
            self._release_pickup(previous)
            vendor.active_pickups = (vendor.active_pickups or 0) + 1

        booking.vendor_id = vendor.id
        booking.vendor = vendor
        booking.status = ASSIGNED
        booking.vendor_latitude = None
        booking.vendor_longitude = None
        self.db.commit()

        logger.info(f"🚚 Booking {booking.reference_id} assigned to vendor {vendor.id}")
        return self._load(booking.id)

    def cancel_booking(self, booking_id: int, user: User) -> Booking:
        """Customer backs out of an assigned pickup; the booking returns to pending"""
        booking = self.get_booking(booking_id, user, "booking.cancel")
        ensure_status(booking.status, [ASSIGNED], "cancel")

        self._release_pickup(booking.vendor)
        booking.vendor_id = None
        booking.vendor = None
        booking.status = PENDING
        booking.vendor_latitude = None
        booking.vendor_longitude = None
        self.db.commit()

        logger.info(f"↩️ Booking {booking.reference_id} cancelled by customer {user.id}")
        return self._load(booking.id)

    def reject_booking(self, booking_id: int, reason: str, user: User) -> Booking:
        """Vendor or admin turns down an assigned pickup"""
        booking = self.get_booking(booking_id, user, "booking.reject")
        ensure_transition(booking.status, REJECTED)

        self._release_pickup(booking.vendor)
        booking.status = REJECTED
        booking.rejection_reason = reason
        self.db.commit()

        logger.info(f"⛔ Booking {booking.reference_id} rejected by user {user.id}: {reason}")
        return self._load(booking.id)

    def complete_booking(self, booking: Booking, payment_mode: str, user: User) -> Booking:
        """Mark a booking completed and generate its invoice in the same transaction"""
        ensure_transition(booking.status, COMPLETED)

        self._release_pickup(booking.vendor)
        booking.status = COMPLETED
        booking.payment_mode = payment_mode
        booking.completed_at = datetime.utcnow()

        try:
            self.db.flush()
            invoice = self.invoices.derive_invoice(booking, commit=False)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent update while completing booking {booking.id}")
            raise HTTPException(
                status_code=409, detail="Booking was updated by another request"
            ) from e
        except HTTPException:
            self.db.rollback()
            raise

        logger.info(
            f"✅ Booking {booking.reference_id} completed by user {user.id} "
            f"({payment_mode}), invoice {invoice.invoice_number}"
        )
        return self._load(booking.id)

    def update_status(self, booking_id: int, data: StatusUpdateRequest, user: User) -> Booking:
        """Generic status change used by vendors and admins"""
        booking = self.get_booking(booking_id, user, "booking.update_status")

        if data.status in (PENDING, ASSIGNED):
            raise HTTPException(
                status_code=409,
                detail=f"Use vendor assignment or cancellation to move a booking to {data.status}",
            )

        if data.status == COMPLETED:
            return self.complete_booking(booking, data.paymentMode, user)

        if data.status == REJECTED:
            return self.reject_booking(booking_id, data.rejectionReason, user)

        ensure_transition(booking.status, data.status)
        booking.status = data.status
        self.db.commit()
        return self._load(booking.id)

    # ------------------------------------------------------------------
    # Pickup tracking and payment
    # ------------------------------------------------------------------

    def update_location(self, booking_id: int, data: LocationUpdate, user: User) -> Booking:
        """Assigned vendor reports their live position"""
        booking = self.get_booking(booking_id, user, "booking.track")
        ensure_status(booking.status, [ASSIGNED], "track")

        booking.vendor_latitude = data.latitude
        booking.vendor_longitude = data.longitude
        self.db.commit()
        return self._load(booking.id)

    def update_payment_status(self, booking_id: int, payment_status: str, user: User) -> Booking:
        """Record whether the customer has been paid for a completed pickup"""
        booking = self.get_booking(booking_id, user, "booking.payment_status")
        ensure_status(booking.status, [COMPLETED], "update payment for")

        booking.payment_status = payment_status
        self.db.commit()
        logger.info(f"💰 Booking {booking.reference_id} payment status set to {payment_status}")
        return self._load(booking.id)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    @staticmethod
    def notification_summary(booking: Booking) -> dict:
        """Plain-data summary handed to the background notification task"""
        return {
            "booking_id": booking.id,
            "reference_id": booking.reference_id,
            "customer_name": booking.customer_name,
            "customer_phone": booking.customer_phone,
            "customer_address": booking.customer_address,
            "items": [
                {
                    "category_name": item.category_name,
                    "quantity": item.quantity,
                    "value": format_money(item.value),
                }
                for item in booking.items
            ],
            "total_value": format_money(booking.total_value),
        }
