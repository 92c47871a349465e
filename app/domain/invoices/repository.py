"""Invoice repository - Database operations for invoices"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models_invoice import Invoice


class InvoiceRepository:
    """Repository for invoice database operations"""

    @staticmethod
    def get_invoice_by_booking(db: Session, booking_id: int) -> Optional[Invoice]:
        """Get the invoice generated for a booking"""
        return db.query(Invoice).filter(Invoice.booking_id == booking_id).first()

    @staticmethod
    def add_invoice(db: Session, **invoice_data) -> Invoice:
        """Add an invoice to the session and flush it (caller commits)"""
        invoice = Invoice(**invoice_data)
        db.add(invoice)
        db.flush()
        return invoice
