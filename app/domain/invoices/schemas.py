"""Invoice domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models_invoice import Invoice
from ...shared.validators import format_money


class InvoiceResponse(BaseModel):
    """Schema for invoice response"""

    id: int
    bookingId: int
    invoiceNumber: str
    customerName: str
    customerPhone: str
    customerAddress: str
    vendorName: str
    vendorPhone: str
    totalValue: str
    platformFee: str
    netAmount: str
    paymentMode: Optional[str]
    createdAt: Optional[datetime]

    @classmethod
    def from_invoice(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id,
            bookingId=invoice.booking_id,
            invoiceNumber=invoice.invoice_number,
            customerName=invoice.customer_name,
            customerPhone=invoice.customer_phone,
            customerAddress=invoice.customer_address,
            vendorName=invoice.vendor_name,
            vendorPhone=invoice.vendor_phone,
            totalValue=format_money(invoice.total_value),
            platformFee=format_money(invoice.platform_fee),
            netAmount=format_money(invoice.net_amount),
            paymentMode=invoice.payment_mode,
            createdAt=invoice.created_at,
        )
