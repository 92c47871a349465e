"""Review repository - Database operations for vendor reviews"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Review


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def get_review_by_booking(db: Session, booking_id: int) -> Optional[Review]:
        return db.query(Review).filter(Review.booking_id == booking_id).first()

    @staticmethod
    def get_reviews_by_vendor(db: Session, vendor_id: int) -> list[Review]:
        """Get a vendor's reviews with the reviewer loaded, newest first"""
        return (
            db.query(Review)
            .options(joinedload(Review.customer))
            .filter(Review.vendor_id == vendor_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    @staticmethod
    def get_vendor_rating(db: Session, vendor_id: int) -> tuple[Optional[float], int]:
        """Average rating and review count for a vendor"""
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.vendor_id == vendor_id)
            .one()
        )
        return (float(average) if average is not None else None), count

    @staticmethod
    def create_review(db: Session, **review_data) -> Review:
        """Create a new review"""
        review = Review(**review_data)
        db.add(review)
        db.commit()
        db.refresh(review)
        return review
