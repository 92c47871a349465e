"""Booking status graph and settlement arithmetic"""

from decimal import Decimal
from typing import Iterable, Optional

from fastapi import HTTPException

from ...shared.validators import to_money

PENDING = "pending"
ASSIGNED = "assigned"
COMPLETED = "completed"
REJECTED = "rejected"
CANCELLED = "cancelled"

STATUSES = (PENDING, ASSIGNED, COMPLETED, REJECTED, CANCELLED)
TERMINAL_STATUSES = frozenset({COMPLETED, REJECTED, CANCELLED})

PAYMENT_MODES = ("cash", "upi")
PAYMENT_STATUSES = ("unpaid", "paid")

# current status -> statuses reachable from it
TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({ASSIGNED}),
    # assigned -> assigned is a re-assignment to another vendor
    ASSIGNED: frozenset({ASSIGNED, PENDING, REJECTED, COMPLETED}),
    COMPLETED: frozenset(),
    REJECTED: frozenset(),
    CANCELLED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """Raise 409 when the booking cannot move from current to target"""
    if not can_transition(current, target):
        raise HTTPException(
            status_code=409,
            detail=f"Cannot change booking status from {current} to {target}",
        )


def ensure_status(current: str, allowed: Iterable[str], action: str) -> None:
    """Raise 409 unless the booking is in one of the allowed statuses"""
    allowed = tuple(allowed)
    if current not in allowed:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot {action} a booking that is {current}; it must be {' or '.join(allowed)}",
        )


def item_value(rate, quantity: int) -> Decimal:
    return to_money(Decimal(str(rate)) * quantity)


def total_of(values: Iterable) -> Decimal:
    return to_money(sum((Decimal(str(v)) for v in values), Decimal("0")))


def compute_settlement(total_value, platform_fee_percent) -> tuple[Decimal, Decimal]:
    """
    Split a booking total into (platform_fee, net_amount).

    platform_fee = total * percent / 100 and net_amount = total - platform_fee,
    both rounded to 2 decimal places so that they always add back up to total.
    """
    total = to_money(total_value)
    platform_fee = to_money(total * Decimal(str(platform_fee_percent)) / Decimal("100"))
    net_amount = to_money(total - platform_fee)
    return platform_fee, net_amount


def build_reference_id(prefix: str, last_reference_id: Optional[str], start: int) -> str:
    """Next booking reference: EBH-MUM-1000, EBH-MUM-1001, ..."""
    if not last_reference_id:
        return f"{prefix}{start}"

    try:
        last = int(last_reference_id[len(prefix):])
    except ValueError:
        return f"{prefix}{start}"

    return f"{prefix}{max(last + 1, start):04d}"


def invoice_number_for(reference_id: str, booking_prefix: str, invoice_prefix: str) -> str:
    """EBH-MUM-1000 -> INV-1000"""
    suffix = reference_id
    if booking_prefix and reference_id.startswith(booking_prefix):
        suffix = reference_id[len(booking_prefix):]
    return f"{invoice_prefix}{suffix}"
