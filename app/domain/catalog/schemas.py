"""Category schemas - Pydantic models for validation"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import format_money, require_text

UNITS = ("unit", "kg")
DEFAULT_ICON = "Package"


def _validate_unit(v):
    if v is not None and v not in UNITS:
        raise ValueError(f"unit must be one of {', '.join(UNITS)}")
    return v


class CategoryCreate(BaseModel):
    name: str
    unit: str
    minRate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    maxRate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    icon: str = DEFAULT_ICON

    @field_validator("name", "icon")
    @classmethod
    def validate_required(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v):
        return _validate_unit(v)

    @model_validator(mode="after")
    def check_rate_band(self):
        if self.minRate > self.maxRate:
            raise ValueError("minRate cannot exceed maxRate")
        return self


class CategoryUpdate(BaseModel):
    """Partial update; the rate band is checked against the stored values in the service"""

    name: Optional[str] = None
    unit: Optional[str] = None
    minRate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    maxRate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    icon: Optional[str] = None

    @field_validator("name", "icon")
    @classmethod
    def validate_text(cls, v, info):
        if v is None:
            return v
        return require_text(v, info.field_name)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v):
        return _validate_unit(v)


class CategoryResponse(BaseModel):
    id: int
    name: str
    unit: str
    minRate: str
    maxRate: str
    icon: str

    @classmethod
    def from_category(cls, category) -> "CategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            unit=category.unit,
            minRate=format_money(category.min_rate),
            maxRate=format_money(category.max_rate),
            icon=category.icon,
        )
