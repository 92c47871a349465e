import os

# Configure an isolated in-memory database and no email transport before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["RESEND_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.auth import get_or_create_user_by_phone  # noqa: E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.domain.catalog.service import seed_categories  # noqa: E402
from app.main import app  # noqa: E402

CUSTOMER_PHONE = "9876543210"
OTHER_CUSTOMER_PHONE = "9876500000"
ADMIN_PHONE = "9000000001"
VENDOR_PHONE = "9000000002"
SECOND_VENDOR_PHONE = "9000000003"


def as_user(phone: str) -> dict:
    """Request headers identifying the caller by phone number"""
    return {"X-User-Phone": phone}


def set_role(phone: str, role: str) -> int:
    """Create (if needed) the user with this phone and force their role directly in the DB"""
    with SessionLocal() as db:
        user = get_or_create_user_by_phone(db, phone)
        user.role = role
        db.commit()
        return user.id


def booking_payload(category_id: int, quantity: int = 10, rate: str = "15", **overrides) -> dict:
    payload = {
        "customerName": "Asha Patil",
        "customerPhone": "98765 43210",
        "customerAddress": "12 MG Road, Andheri West",
        "pinCode": "400053",
        "district": "Mumbai Suburban",
        "state": "Maharashtra",
        "items": [
            {
                "categoryId": category_id,
                "categoryName": "Plastic",
                "quantity": quantity,
                "rate": rate,
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_categories(db)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def categories(client) -> dict:
    """Seeded category ids keyed by name"""
    response = client.get("/api/categories")
    assert response.status_code == 200
    return {c["name"]: c["id"] for c in response.json()}


@pytest.fixture
def customer() -> dict:
    set_role(CUSTOMER_PHONE, "customer")
    return as_user(CUSTOMER_PHONE)


@pytest.fixture
def other_customer() -> dict:
    set_role(OTHER_CUSTOMER_PHONE, "customer")
    return as_user(OTHER_CUSTOMER_PHONE)


@pytest.fixture
def admin() -> dict:
    set_role(ADMIN_PHONE, "admin")
    return as_user(ADMIN_PHONE)


def onboard_vendor(client, admin_headers: dict, phone: str, name: str = "Ravi Scrap Co") -> dict:
    response = client.post(
        "/api/admin/vendors/onboard",
        json={
            "name": name,
            "phone": phone,
            "location": "Andheri East",
            "pinCode": "400069",
            "district": "Mumbai Suburban",
            "state": "Maharashtra",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def vendor(client, admin) -> dict:
    """An onboarded vendor profile"""
    return onboard_vendor(client, admin, VENDOR_PHONE)


@pytest.fixture
def vendor_headers(vendor) -> dict:
    return as_user(VENDOR_PHONE)


@pytest.fixture
def second_vendor(client, admin) -> dict:
    return onboard_vendor(client, admin, SECOND_VENDOR_PHONE, name="Mumbai Kabadiwala")


@pytest.fixture
def create_booking(client, customer, categories):
    """Factory creating a booking as the default customer"""

    def _create(category: str = "Plastic", quantity: int = 10, rate: str = "15", headers=None, **overrides):
        response = client.post(
            "/api/bookings",
            json=booking_payload(categories[category], quantity, rate, **overrides),
            headers=headers or customer,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def assigned_booking(client, admin, vendor, create_booking) -> dict:
    booking = create_booking()
    response = client.patch(
        f"/api/bookings/{booking['id']}/assign", json={"vendorId": vendor["id"]}, headers=admin
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def completed_booking(client, assigned_booking, vendor_headers) -> dict:
    response = client.patch(
        f"/api/bookings/{assigned_booking['id']}/status",
        json={"status": "completed", "paymentMode": "cash"},
        headers=vendor_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()
