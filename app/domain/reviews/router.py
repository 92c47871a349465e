"""Review router - Ratings for vendors after a completed pickup"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ReviewCreate, ReviewResponse, VendorReviewsResponse
from .service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """Rate the vendor of a completed booking"""
    review = service.create_review(data, current_user)
    return ReviewResponse.from_review(review)


@router.get("/vendor/{vendor_id}", response_model=VendorReviewsResponse)
async def get_vendor_reviews(
    vendor_id: int,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """A vendor's reviews, newest first, with their average rating"""
    reviews, average, count = service.get_vendor_reviews(vendor_id)
    return VendorReviewsResponse(
        vendorId=vendor_id,
        averageRating=average,
        reviewCount=count,
        reviews=[ReviewResponse.from_review(r) for r in reviews],
    )
