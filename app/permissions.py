"""
Role and ownership checks for every protected action.

Each action maps to the roles that may perform it unconditionally and the
roles that may perform it only when an ownership predicate holds for the
booking involved.
"""

import logging
from typing import Callable, Optional

from fastapi import HTTPException

from .models import Booking, User

logger = logging.getLogger(__name__)


def is_booking_owner(user: User, booking: Optional[Booking]) -> bool:
    return booking is not None and booking.customer_id == user.id


def is_assigned_vendor(user: User, booking: Optional[Booking]) -> bool:
    if booking is None or booking.vendor_id is None or user.vendor is None:
        return False
    return booking.vendor_id == user.vendor.id


# action -> (roles always allowed, {role: ownership predicate})
CAPABILITIES: dict[str, tuple[set[str], dict[str, Callable[[User, Optional[Booking]], bool]]]] = {
    "booking.create": ({"customer", "admin"}, {}),
    "booking.list_all": ({"admin"}, {}),
    "booking.view": (
        {"admin"},
        {"customer": is_booking_owner, "vendor": is_assigned_vendor},
    ),
    "booking.assign": ({"admin"}, {}),
    "booking.cancel": (set(), {"customer": is_booking_owner}),
    "booking.reject": ({"admin"}, {"vendor": is_assigned_vendor}),
    "booking.update_status": ({"admin"}, {"vendor": is_assigned_vendor}),
    "booking.payment_status": ({"admin"}, {"vendor": is_assigned_vendor}),
    "booking.edit": (set(), {"customer": is_booking_owner}),
    "booking.delete": ({"admin"}, {"customer": is_booking_owner}),
    "booking.track": (set(), {"vendor": is_assigned_vendor}),
    "invoice.view": (
        {"admin"},
        {"customer": is_booking_owner, "vendor": is_assigned_vendor},
    ),
    "review.create": (set(), {"customer": is_booking_owner}),
    "user.manage": ({"admin"}, {}),
    "vendor.manage": ({"admin"}, {}),
    "category.manage": ({"admin"}, {}),
    "settings.manage": ({"admin"}, {}),
}


def is_allowed(user: User, action: str, booking: Optional[Booking] = None) -> bool:
    """Check whether the user may perform the action on the (optional) booking"""
    if action not in CAPABILITIES:
        raise KeyError(f"Unknown action: {action}")

    roles, ownership = CAPABILITIES[action]
    if user.role in roles:
        return True

    predicate = ownership.get(user.role)
    return predicate is not None and predicate(user, booking)


def authorize(user: User, action: str, booking: Optional[Booking] = None) -> None:
    """Raise 403 unless the user may perform the action"""
    if not is_allowed(user, action, booking):
        target = f" on booking {booking.id}" if booking is not None else ""
        logger.warning(f"🚫 User {user.id} ({user.role}) denied {action}{target}")
        raise HTTPException(status_code=403, detail="You are not allowed to perform this action")
