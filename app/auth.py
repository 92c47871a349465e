import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from .database import get_db
from .models import User
from .shared.validators import normalize_phone

logger = logging.getLogger(__name__)

# The frontend authenticates the phone number with the identity provider and
# forwards it on every request.
phone_header = APIKeyHeader(name="X-User-Phone", auto_error=False)

ROLES = ("customer", "admin", "vendor")


def get_or_create_user_by_phone(db: Session, phone_number: str) -> User:
    """Look up a user by phone number, creating a customer account on first contact"""
    user = (
        db.query(User)
        .filter(User.phone_number == phone_number)
        .options(joinedload(User.vendor))
        .first()
    )
    if user:
        return user

    logger.info(f"🆕 Creating new customer for phone {phone_number}")
    user = User(phone_number=phone_number, role="customer")
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Another request created the same phone number between check and insert
        db.rollback()
        user = db.query(User).filter(User.phone_number == phone_number).first()
        if not user:
            raise
    return user


async def get_current_user(
    phone: Optional[str] = Depends(phone_header),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from the X-User-Phone header"""
    if not phone or not phone.strip():
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        phone_number = normalize_phone(phone)
    except ValueError as e:
        logger.warning(f"⚠️ Rejected malformed identity header: {phone!r}")
        raise HTTPException(status_code=401, detail="Invalid phone number") from e

    user = get_or_create_user_by_phone(db, phone_number)
    logger.debug(f"✅ User authenticated: {user.id} ({user.role})")
    return user


def require_roles(*roles: str):
    """Dependency factory restricting an endpoint to the given roles"""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"🚫 User {user.id} with role {user.role} denied; requires {roles}")
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return dependency
