"""Invoice service - Settlement split and idempotent invoice generation"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import BOOKING_REFERENCE_PREFIX, INVOICE_NUMBER_PREFIX
from ...models import Booking
from ...models_invoice import Invoice
from ...services.invoice_pdf_generator import InvoicePDFGenerator
from ..bookings.lifecycle import COMPLETED, compute_settlement, invoice_number_for
from ..settings.service import PlatformSettings
from .repository import InvoiceRepository

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service layer for invoices"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InvoiceRepository()
        self.settings = PlatformSettings(db)

    def derive_invoice(self, booking: Booking, commit: bool = True) -> Invoice:
        """
        Return the booking's invoice, creating it on first request.

        With commit=False the new row is only flushed so the caller can commit
        it together with the status change that triggered it.
        """
        existing = self.repo.get_invoice_by_booking(self.db, booking.id)
        if existing:
            return existing

        if booking.status != COMPLETED:
            raise HTTPException(
                status_code=409, detail="Invoice is only available for completed bookings"
            )

        vendor = booking.vendor
        if not vendor or not vendor.user:
            logger.error(f"❌ Booking {booking.id} completed without a resolvable vendor")
            raise HTTPException(status_code=409, detail="Booking has no assigned vendor")

        percent = self.settings.platform_fee_percent
        platform_fee, net_amount = compute_settlement(booking.total_value, percent)

        invoice_data = {
            "booking_id": booking.id,
            "invoice_number": invoice_number_for(
                booking.reference_id, BOOKING_REFERENCE_PREFIX, INVOICE_NUMBER_PREFIX
            ),
            "customer_name": booking.customer_name,
            "customer_phone": booking.customer_phone,
            "customer_address": booking.customer_address,
            "vendor_name": vendor.user.display_name,
            "vendor_phone": vendor.user.phone_number,
            "total_value": booking.total_value,
            "platform_fee": platform_fee,
            "net_amount": net_amount,
            "payment_mode": booking.payment_mode,
        }

        if not commit:
            invoice = self.repo.add_invoice(self.db, **invoice_data)
            logger.info(f"🧾 Invoice {invoice.invoice_number} staged for booking {booking.id}")
            return invoice

        try:
            invoice = self.repo.add_invoice(self.db, **invoice_data)
            self.db.commit()
        except IntegrityError:
            # A concurrent request generated it first
            self.db.rollback()
            existing = self.repo.get_invoice_by_booking(self.db, booking.id)
            if not existing:
                raise
            return existing

        self.db.refresh(invoice)
        logger.info(
            f"🧾 Invoice {invoice.invoice_number} generated for booking {booking.id}: "
            f"fee={platform_fee} ({percent}%), net={net_amount}"
        )
        return invoice

    def render_pdf(self, invoice: Invoice, booking: Booking) -> bytes:
        return InvoicePDFGenerator(invoice, booking).generate()
