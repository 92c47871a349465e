"""
Invoice model for completed pickups
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Invoice(Base):
    """Settlement record generated once a booking completes"""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    invoice_number = Column(String(50), unique=True, nullable=False, index=True)

    # Snapshot of the parties at completion time
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_address = Column(Text, nullable=False)
    vendor_name = Column(String(255), nullable=False)
    vendor_phone = Column(String(20), nullable=False)

    # Amounts
    total_value = Column(Numeric(10, 2), nullable=False)
    platform_fee = Column(Numeric(10, 2), nullable=False)
    net_amount = Column(Numeric(10, 2), nullable=False)  # owed to the vendor
    payment_mode = Column(String(10), nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="invoice")
