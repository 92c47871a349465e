from conftest import VENDOR_PHONE, as_user, onboard_vendor


def test_onboard_vendor(client, admin, vendor):
    assert vendor["name"] == "Ravi Scrap Co"
    assert vendor["phone"] == VENDOR_PHONE
    assert vendor["pinCode"] == "400069"
    assert vendor["active"] is True
    assert vendor["activePickups"] == 0

    me = client.get("/api/auth/me", headers=as_user(VENDOR_PHONE)).json()
    assert me["role"] == "vendor"


def test_onboarding_promotes_existing_customer(client, admin, customer):
    vendor = onboard_vendor(client, admin, "9876543210", name="Asha Recyclers")

    me = client.get("/api/users/me", headers=customer).json()
    assert me["role"] == "vendor"
    assert me["name"] == "Asha Recyclers"
    assert me["vendorId"] == vendor["id"]


def test_onboarding_rules(client, admin, customer, vendor):
    payload = {
        "name": "Duplicate",
        "phone": VENDOR_PHONE,
        "location": "Andheri East",
        "pinCode": "400069",
        "district": "Mumbai Suburban",
        "state": "Maharashtra",
    }
    assert client.post("/api/admin/vendors/onboard", json=payload, headers=admin).status_code == 409
    assert client.post(
        "/api/admin/vendors/onboard", json={**payload, "phone": "9111111111"}, headers=customer
    ).status_code == 403
    assert client.post(
        "/api/admin/vendors/onboard", json={**payload, "phone": "9111111111", "pinCode": "4000"}, headers=admin
    ).status_code == 400
    assert client.post(
        "/api/admin/vendors/onboard", json={**payload, "phone": "12"}, headers=admin
    ).status_code == 400


def test_list_and_get_vendors(client, admin, customer, vendor, second_vendor):
    vendors = client.get("/api/vendors", headers=admin).json()
    assert {v["id"] for v in vendors} == {vendor["id"], second_vendor["id"]}

    assert client.get(f"/api/vendors/{vendor['id']}", headers=admin).json()["phone"] == VENDOR_PHONE
    assert client.get("/api/vendors/9999", headers=admin).status_code == 404
    assert client.get("/api/vendors", headers=customer).status_code == 403


def test_vendor_reads_own_profile(client, customer, vendor, vendor_headers):
    response = client.get("/api/vendors/me", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["id"] == vendor["id"]

    assert client.get("/api/vendors/me", headers=customer).status_code == 403


def test_update_vendor(client, admin, vendor):
    response = client.patch(
        f"/api/vendors/{vendor['id']}",
        json={"active": False, "location": "Bandra West", "pinCode": "400050"},
        headers=admin,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["active"] is False
    assert body["location"] == "Bandra West"
    assert body["pinCode"] == "400050"
    assert body["district"] == "Mumbai Suburban"

    assert client.patch(
        f"/api/vendors/{vendor['id']}", json={"pinCode": "40005"}, headers=admin
    ).status_code == 400
