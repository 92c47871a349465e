from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    phone_number = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    pin_code = Column(String(6), nullable=True)
    district = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default="customer")  # customer, admin, vendor
    created_at = Column(DateTime, server_default=func.now())

    vendor = relationship("Vendor", back_populates="user", uselist=False)
    bookings = relationship("Booking", back_populates="customer")

    @property
    def display_name(self) -> str:
        return self.name or self.phone_number


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    location = Column(String(255), nullable=False)
    pin_code = Column(String(6), nullable=True)
    district = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    # Identity documents
    aadhar_number = Column(String(20), nullable=True)
    pan_number = Column(String(20), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    active_pickups = Column(Integer, nullable=False, default=0)  # bookings currently assigned
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="vendor")
    bookings = relationship("Booking", back_populates="vendor")
    reviews = relationship("Review", back_populates="vendor")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    unit = Column(String(10), nullable=False)  # unit, kg
    min_rate = Column(Numeric(10, 2), nullable=False)
    max_rate = Column(Numeric(10, 2), nullable=False)
    icon = Column(String(50), nullable=False)  # icon name for frontend


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    reference_id = Column(String(50), unique=True, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Customer details are copied at creation time, not joined
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_address = Column(Text, nullable=False)
    pin_code = Column(String(6), nullable=True)
    district = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)

    total_value = Column(Numeric(10, 2), nullable=False)
    payment_mode = Column(String(10), nullable=True)  # cash, upi
    payment_status = Column(String(10), nullable=False, default="unpaid")  # unpaid, paid
    status = Column(
        String(20), nullable=False, default="pending", index=True
    )  # pending, assigned, completed, rejected, cancelled
    rejection_reason = Column(Text, nullable=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)

    # Vendor live location while a pickup is underway
    vendor_latitude = Column(Float, nullable=True)
    vendor_longitude = Column(Float, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    completed_at = Column(DateTime, nullable=True)

    customer = relationship("User", back_populates="bookings")
    vendor = relationship("Vendor", back_populates="bookings")
    items = relationship(
        "BookingItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingItem.id",
    )
    review = relationship(
        "Review", back_populates="booking", uselist=False, cascade="all, delete-orphan"
    )
    invoice = relationship("Invoice", back_populates="booking", uselist=False)


class BookingItem(Base):
    __tablename__ = "booking_items"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    category_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    rate = Column(Numeric(10, 2), nullable=False)
    value = Column(Numeric(10, 2), nullable=False)  # rate x quantity

    booking = relationship("Booking", back_populates="items")
    category = relationship("Category")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),)

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="review")
    customer = relationship("User")
    vendor = relationship("Vendor", back_populates="reviews")


class Setting(Base):
    """Admin-editable tunables such as platform_fee_percent"""

    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
