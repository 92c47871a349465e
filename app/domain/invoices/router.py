"""Invoice router - Invoice lookup and PDF download for completed bookings"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..bookings.service import BookingService
from .schemas import InvoiceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Invoices"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("/{booking_id}/invoice", response_model=InvoiceResponse)
async def get_invoice(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Return the booking's invoice, generating it if it does not exist yet"""
    booking = service.get_booking(booking_id, current_user, "invoice.view")
    invoice = service.invoices.derive_invoice(booking)
    return InvoiceResponse.from_invoice(invoice)


@router.get("/{booking_id}/invoice/pdf")
async def download_invoice_pdf(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Download the invoice as a PDF"""
    booking = service.get_booking(booking_id, current_user, "invoice.view")
    invoice = service.invoices.derive_invoice(booking)
    pdf_bytes = service.invoices.render_pdf(invoice, booking)

    logger.info(f"📄 Invoice {invoice.invoice_number} downloaded by user {current_user.id}")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.pdf"'},
    )
