"""Settings domain schemas - Pydantic models for validation"""

from decimal import Decimal

from pydantic import BaseModel, Field


class PlatformFeeUpdate(BaseModel):
    """Schema for changing the platform fee"""

    percent: Decimal = Field(..., ge=0, le=100, decimal_places=2)


class PlatformFeeResponse(BaseModel):
    percent: str
    version: int = 0
