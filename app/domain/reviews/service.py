"""Review service - Customer ratings for completed pickups"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Review, User
from ...permissions import authorize
from ..bookings.lifecycle import COMPLETED
from ..bookings.repository import BookingRepository
from .repository import ReviewRepository
from .schemas import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for review business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()

    def create_review(self, data: ReviewCreate, user: User) -> Review:
        """Review the vendor of one of the caller's completed bookings, once"""
        booking = BookingRepository.get_booking_by_id(self.db, data.bookingId)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        authorize(user, "review.create", booking)

        if booking.status != COMPLETED:
            raise HTTPException(status_code=409, detail="Only completed bookings can be reviewed")
        if booking.vendor_id is None:
            raise HTTPException(status_code=409, detail="Booking has no assigned vendor")

        if self.repo.get_review_by_booking(self.db, booking.id):
            raise HTTPException(status_code=409, detail="Booking has already been reviewed")

        try:
            review = self.repo.create_review(
                self.db,
                booking_id=booking.id,
                customer_id=user.id,
                vendor_id=booking.vendor_id,
                rating=data.rating,
                comment=data.comment,
            )
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate review for booking {booking.id}")
            raise HTTPException(status_code=409, detail="Booking has already been reviewed") from e

        logger.info(
            f"⭐ Review {review.id} ({review.rating}/5) for vendor {review.vendor_id} "
            f"on booking {booking.reference_id}"
        )
        return review

    def get_vendor_reviews(self, vendor_id: int) -> tuple[list[Review], float, int]:
        if not BookingRepository.get_vendor_by_id(self.db, vendor_id):
            raise HTTPException(status_code=404, detail="Vendor not found")

        reviews = self.repo.get_reviews_by_vendor(self.db, vendor_id)
        average, count = self.repo.get_vendor_rating(self.db, vendor_id)
        if average is not None:
            average = round(average, 2)
        return reviews, average, count
