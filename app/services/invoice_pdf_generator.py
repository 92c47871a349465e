"""
Invoice PDF Generator
Renders a completed pickup's invoice as a one-page PDF
"""

import io
import logging
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..models import Booking
from ..models_invoice import Invoice
from ..shared.validators import format_money

logger = logging.getLogger(__name__)


class InvoicePDFGenerator:
    """Generate the downloadable invoice for a booking"""

    def __init__(self, invoice: Invoice, booking: Booking):
        self.invoice = invoice
        self.booking = booking

        # PDF settings
        self.page_width, self.page_height = A4
        self.margin = 0.75 * inch

        self.brand_color = colors.HexColor("#16a34a")
        self.dark_gray = colors.HexColor("#1e293b")
        self.light_gray = colors.HexColor("#f1f5f9")

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        logger.info(f"📄 Generating invoice PDF {self.invoice.invoice_number}")

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=f"Invoice {self.invoice.invoice_number}",
        )

        story = []
        styles = getSampleStyleSheet()

        title_style = ParagraphStyle(
            "InvoiceTitle",
            parent=styles["Heading1"],
            fontSize=22,
            textColor=self.brand_color,
            spaceAfter=12,
            alignment=1,  # Center
        )
        heading_style = ParagraphStyle(
            "InvoiceHeading",
            parent=styles["Heading2"],
            fontSize=13,
            textColor=self.dark_gray,
            spaceAfter=8,
            spaceBefore=16,
        )

        story.append(Paragraph("eBhangar Pickup Invoice", title_style))
        story.append(Spacer(1, 0.2 * inch))

        created = self.invoice.created_at or self.booking.completed_at
        info_data = [
            ["Invoice No:", self.invoice.invoice_number],
            ["Booking Ref:", self.booking.reference_id],
            ["Date:", created.strftime("%d %b %Y") if created else "-"],
            ["Customer:", f"{self.invoice.customer_name} ({self.invoice.customer_phone})"],
            ["Address:", Paragraph(escape(self.invoice.customer_address), styles["Normal"])],
            ["Vendor:", f"{self.invoice.vendor_name} ({self.invoice.vendor_phone})"],
            ["Payment Mode:", (self.invoice.payment_mode or "-").upper()],
        ]
        info_table = Table(info_data, colWidths=[1.5 * inch, 4.5 * inch])
        info_table.setStyle(
            TableStyle(
                [
                    ("FONT", (0, 0), (0, -1), "Helvetica-Bold", 10),
                    ("FONT", (1, 0), (1, -1), "Helvetica", 10),
                    ("TEXTCOLOR", (0, 0), (-1, -1), self.dark_gray),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        story.append(info_table)

        story.append(Paragraph("ITEMS", heading_style))
        item_rows = [["Item", "Qty", "Rate (Rs)", "Value (Rs)"]]
        for item in self.booking.items:
            item_rows.append(
                [item.category_name, str(item.quantity), format_money(item.rate), format_money(item.value)]
            )
        items_table = Table(
            item_rows, colWidths=[3 * inch, 0.8 * inch, 1.1 * inch, 1.1 * inch], repeatRows=1
        )
        items_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), self.brand_color),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 10),
                    ("FONT", (0, 1), (-1, -1), "Helvetica", 9),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, self.light_gray]),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        story.append(items_table)

        story.append(Paragraph("SETTLEMENT", heading_style))
        totals = Table(
            [
                ["Total Value", format_money(self.invoice.total_value)],
                ["Platform Fee", format_money(self.invoice.platform_fee)],
                ["Net Amount to Vendor", format_money(self.invoice.net_amount)],
            ],
            colWidths=[4.9 * inch, 1.1 * inch],
        )
        totals.setStyle(
            TableStyle(
                [
                    ("FONT", (0, 0), (-1, -1), "Helvetica", 10),
                    ("FONT", (0, -1), (-1, -1), "Helvetica-Bold", 11),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("LINEABOVE", (0, -1), (-1, -1), 1, self.dark_gray),
                ]
            )
        )
        story.append(totals)

        doc.build(story)

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"✅ Generated invoice PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes
