import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import ROLES, get_current_user
from ..database import get_db
from ..domain.vendors.service import VendorService
from ..models import User
from ..permissions import authorize
from ..shared.validators import optional_text, validate_pin_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


class UserUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    pinCode: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None

    @field_validator("name", "address", "district", "state")
    @classmethod
    def strip_text(cls, v):
        return optional_text(v)

    @field_validator("pinCode")
    @classmethod
    def validate_pin(cls, v):
        return validate_pin_code(v)


class RoleUpdate(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v not in ROLES:
            raise ValueError(f"role must be one of {', '.join(ROLES)}")
        return v


class UserResponse(BaseModel):
    id: int
    phone: str
    name: Optional[str]
    address: Optional[str]
    pinCode: Optional[str]
    district: Optional[str]
    state: Optional[str]
    role: str
    vendorId: Optional[int] = None
    createdAt: Optional[datetime]

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            phone=user.phone_number,
            name=user.name,
            address=user.address,
            pinCode=user.pin_code,
            district=user.district,
            state=user.state,
            role=user.role,
            vendorId=user.vendor.id if user.vendor else None,
            createdAt=user.created_at,
        )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the caller's profile"""
    return UserResponse.from_user(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the caller's name and address details"""
    if data.name is not None:
        current_user.name = data.name
    if data.address is not None:
        current_user.address = data.address
    if data.pinCode is not None:
        current_user.pin_code = data.pinCode
    if data.district is not None:
        current_user.district = data.district
    if data.state is not None:
        current_user.state = data.state

    db.commit()
    db.refresh(current_user)
    logger.info(f"✏️ User {current_user.id} updated their profile")
    return UserResponse.from_user(current_user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All users, newest first (admin only)"""
    authorize(current_user, "user.manage")
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return [UserResponse.from_user(u) for u in users]


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    data: RoleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Change a user's role (admin only).

    Promoting a user to vendor also provisions their vendor profile; the role
    change and the profile are committed together or not at all.
    """
    authorize(current_user, "user.manage")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    previous_role = user.role
    try:
        user.role = data.role
        if data.role == "vendor":
            VendorService(db).provision_vendor_profile(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"❌ Role change for user {user_id} rolled back: {e}")
        raise HTTPException(status_code=409, detail="User was updated by another request") from e

    db.refresh(user)
    logger.info(f"👤 User {user.id} role changed {previous_role} -> {user.role} by admin {current_user.id}")
    return UserResponse.from_user(user)
