"""Review domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import optional_text


class ReviewCreate(BaseModel):
    """Schema for reviewing a completed pickup"""

    bookingId: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v):
        return optional_text(v)


class ReviewResponse(BaseModel):
    id: int
    bookingId: int
    customerId: int
    vendorId: int
    rating: int
    comment: Optional[str]
    customerName: Optional[str] = None
    createdAt: Optional[datetime]

    @classmethod
    def from_review(cls, review) -> "ReviewResponse":
        return cls(
            id=review.id,
            bookingId=review.booking_id,
            customerId=review.customer_id,
            vendorId=review.vendor_id,
            rating=review.rating,
            comment=review.comment,
            customerName=review.customer.display_name if review.customer else None,
            createdAt=review.created_at,
        )


class VendorReviewsResponse(BaseModel):
    """A vendor's reviews plus their aggregate rating"""

    vendorId: int
    averageRating: Optional[float]
    reviewCount: int
    reviews: list[ReviewResponse]
