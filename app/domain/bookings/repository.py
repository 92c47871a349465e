"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Booking, BookingItem, Category, User, Vendor


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _with_relations(query):
        return query.options(
            selectinload(Booking.items),
            joinedload(Booking.vendor).joinedload(Vendor.user),
        )

    @staticmethod
    def get_all_bookings(db: Session) -> list[Booking]:
        """Get every booking, newest first"""
        query = BookingRepository._with_relations(db.query(Booking))
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_bookings_by_customer(db: Session, customer_id: int) -> list[Booking]:
        """Get a customer's bookings, newest first"""
        query = BookingRepository._with_relations(
            db.query(Booking).filter(Booking.customer_id == customer_id)
        )
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_bookings_by_vendor(db: Session, vendor_id: int) -> list[Booking]:
        """Get the bookings assigned to a vendor, newest first"""
        query = BookingRepository._with_relations(
            db.query(Booking).filter(Booking.vendor_id == vendor_id)
        )
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        """Get a specific booking by ID"""
        query = BookingRepository._with_relations(db.query(Booking))
        return query.filter(Booking.id == booking_id).first()

    @staticmethod
    def get_last_reference_id(db: Session, prefix: str) -> Optional[str]:
        """Numerically largest reference id carrying the prefix"""
        row = (
            db.query(Booking.reference_id)
            .filter(Booking.reference_id.like(f"{prefix}%"))
            .order_by(func.length(Booking.reference_id).desc(), Booking.reference_id.desc())
            .first()
        )
        return row[0] if row else None

    @staticmethod
    def get_categories_by_ids(db: Session, category_ids: set[int]) -> dict[int, Category]:
        """Load categories keyed by id"""
        if not category_ids:
            return {}
        categories = db.query(Category).filter(Category.id.in_(category_ids)).all()
        return {c.id: c for c in categories}

    @staticmethod
    def get_vendor_by_id(db: Session, vendor_id: int) -> Optional[Vendor]:
        """Get a vendor with its owning user"""
        return (
            db.query(Vendor)
            .options(joinedload(Vendor.user))
            .filter(Vendor.id == vendor_id)
            .first()
        )

    @staticmethod
    def create_booking(db: Session, customer: User, items: list[BookingItem], **booking_data) -> Booking:
        """Add a booking with its items to the session (caller commits)"""
        booking = Booking(customer_id=customer.id, **booking_data)
        booking.items = items
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def replace_items(db: Session, booking: Booking, items: list[BookingItem]) -> None:
        """Swap a booking's item list wholesale; orphans are deleted on flush"""
        booking.items = items
        db.flush()

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        """Delete a booking; its items cascade"""
        db.delete(booking)
        db.commit()
