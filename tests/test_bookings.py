from conftest import as_user, booking_payload


def test_create_booking_scenario(client, create_booking):
    booking = create_booking(category="Plastic", quantity=10, rate="15")

    assert booking["status"] == "pending"
    assert booking["vendorId"] is None
    assert booking["paymentStatus"] == "unpaid"
    assert booking["totalValue"] == "150.00"
    assert booking["referenceId"] == "EBH-MUM-1000"
    assert booking["customerPhone"] == "9876543210"
    assert booking["items"][0]["categoryName"] == "Plastic"
    assert booking["items"][0]["value"] == "150.00"


def test_reference_ids_increment(create_booking):
    first = create_booking()
    second = create_booking()
    assert first["referenceId"] == "EBH-MUM-1000"
    assert second["referenceId"] == "EBH-MUM-1001"


def test_client_totals_are_recomputed(client, customer, categories):
    payload = booking_payload(categories["Copper"], quantity=2, rate="450")
    payload["items"][0]["value"] = "1"
    payload["totalValue"] = "5"
    payload["items"].append(
        {"categoryId": categories["Paper"], "quantity": 3, "rate": "8.50", "value": "25.50"}
    )

    response = client.post("/api/bookings", json=payload, headers=customer)

    assert response.status_code == 201
    body = response.json()
    assert [i["value"] for i in body["items"]] == ["900.00", "25.50"]
    assert body["totalValue"] == "925.50"
    # Category names come from the catalog, not the request
    assert body["items"][0]["categoryName"] == "Copper"


def test_create_booking_validation(client, customer, categories):
    plastic = categories["Plastic"]

    bad_pin = client.post("/api/bookings", json=booking_payload(plastic, pinCode="12345"), headers=customer)
    assert bad_pin.status_code == 400

    devanagari_pin = client.post(
        "/api/bookings", json=booking_payload(plastic, pinCode="१२३४५६"), headers=customer
    )
    assert devanagari_pin.status_code == 400

    no_items = client.post("/api/bookings", json=booking_payload(plastic, items=[]), headers=customer)
    assert no_items.status_code == 400

    blank_name = client.post(
        "/api/bookings", json=booking_payload(plastic, customerName="   "), headers=customer
    )
    assert blank_name.status_code == 400

    zero_quantity = client.post("/api/bookings", json=booking_payload(plastic, quantity=0), headers=customer)
    assert zero_quantity.status_code == 400

    huge_quantity = client.post(
        "/api/bookings", json=booking_payload(plastic, quantity=10_000_000), headers=customer
    )
    assert huge_quantity.status_code == 400

    over_limit = client.post(
        "/api/bookings", json=booking_payload(plastic, quantity=100_000, rate="99999.99"), headers=customer
    )
    assert over_limit.status_code == 400

    unknown_category = client.post("/api/bookings", json=booking_payload(9999), headers=customer)
    assert unknown_category.status_code == 400

    assert client.get("/api/bookings", headers=customer).json() == []


def test_identity_required(client, categories):
    response = client.post("/api/bookings", json=booking_payload(categories["Plastic"]))
    assert response.status_code == 401
    assert client.get("/api/bookings").status_code == 401


def test_vendor_cannot_create_booking(client, vendor_headers, categories):
    response = client.post(
        "/api/bookings", json=booking_payload(categories["Plastic"]), headers=vendor_headers
    )
    assert response.status_code == 403


def test_booking_visibility(client, admin, other_customer, create_booking):
    booking = create_booking()

    assert client.get(f"/api/bookings/{booking['id']}", headers=other_customer).status_code == 403
    assert client.get(f"/api/bookings/{booking['id']}", headers=admin).status_code == 200
    assert client.get("/api/bookings/9999", headers=admin).status_code == 404

    assert client.get("/api/bookings", headers=other_customer).json() == []
    assert len(client.get("/api/bookings", headers=admin).json()) == 1


def test_bookings_listed_newest_first(client, customer, create_booking):
    first = create_booking()
    second = create_booking()
    ids = [b["id"] for b in client.get("/api/bookings", headers=customer).json()]
    assert ids == [second["id"], first["id"]]


def test_assign_vendor(client, admin, vendor, create_booking):
    booking = create_booking()

    response = client.patch(
        f"/api/bookings/{booking['id']}/assign", json={"vendorId": vendor["id"]}, headers=admin
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "assigned"
    assert body["vendorId"] == vendor["id"]
    assert body["vendor"] == {"id": vendor["id"], "name": "Ravi Scrap Co", "phone": "9000000002"}

    vendor_after = client.get(f"/api/vendors/{vendor['id']}", headers=admin).json()
    assert vendor_after["activePickups"] == 1


def test_assign_requires_admin_and_known_active_vendor(client, admin, customer, vendor, create_booking):
    booking = create_booking()
    url = f"/api/bookings/{booking['id']}/assign"

    assert client.patch(url, json={"vendorId": vendor["id"]}, headers=customer).status_code == 403
    assert client.patch(url, json={"vendorId": 9999}, headers=admin).status_code == 404

    client.patch(f"/api/vendors/{vendor['id']}", json={"active": False}, headers=admin)
    assert client.patch(url, json={"vendorId": vendor["id"]}, headers=admin).status_code == 409

    assert client.get(f"/api/bookings/{booking['id']}", headers=customer).json()["status"] == "pending"


def test_assign_rejects_demoted_vendor(client, admin, customer, vendor, create_booking):
    booking = create_booking()
    url = f"/api/bookings/{booking['id']}/assign"

    demoted = client.patch(f"/api/users/{vendor['userId']}/role", json={"role": "customer"}, headers=admin)
    assert demoted.status_code == 200

    response = client.patch(url, json={"vendorId": vendor["id"]}, headers=admin)
    assert response.status_code == 409

    assert client.get(f"/api/bookings/{booking['id']}", headers=customer).json()["status"] == "pending"

    promoted = client.patch(f"/api/users/{vendor['userId']}/role", json={"role": "vendor"}, headers=admin)
    assert promoted.status_code == 200
    assert client.patch(url, json={"vendorId": vendor["id"]}, headers=admin).status_code == 200


def test_reassign_moves_active_pickup(client, admin, vendor, second_vendor, assigned_booking):
    response = client.patch(
        f"/api/bookings/{assigned_booking['id']}/assign",
        json={"vendorId": second_vendor["id"]},
        headers=admin,
    )

    assert response.status_code == 200
    assert response.json()["vendorId"] == second_vendor["id"]
    assert client.get(f"/api/vendors/{vendor['id']}", headers=admin).json()["activePickups"] == 0
    assert client.get(f"/api/vendors/{second_vendor['id']}", headers=admin).json()["activePickups"] == 1


def test_customer_cancels_assigned_booking(client, customer, assigned_booking):
    response = client.patch(f"/api/bookings/{assigned_booking['id']}/cancel", headers=customer)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "pending"
    assert body["vendorId"] is None


def test_cancel_requires_owner_and_assigned_status(client, customer, other_customer, create_booking, assigned_booking):
    assert client.patch(f"/api/bookings/{assigned_booking['id']}/cancel", headers=other_customer).status_code == 403

    pending = create_booking()
    assert client.patch(f"/api/bookings/{pending['id']}/cancel", headers=customer).status_code == 409


def test_vendor_rejects_with_reason(client, admin, vendor, vendor_headers, assigned_booking):
    url = f"/api/bookings/{assigned_booking['id']}/reject"

    assert client.patch(url, json={"reason": "  "}, headers=vendor_headers).status_code == 400

    response = client.patch(url, json={"reason": "Items not available at address"}, headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["rejectionReason"] == "Items not available at address"

    # Terminal: no re-assignment and no second rejection
    assign = client.patch(
        f"/api/bookings/{assigned_booking['id']}/assign", json={"vendorId": vendor["id"]}, headers=admin
    )
    assert assign.status_code == 409
    assert client.patch(url, json={"reason": "again"}, headers=admin).status_code == 409


def test_reject_pending_booking_conflicts(client, admin, create_booking):
    booking = create_booking()
    response = client.patch(f"/api/bookings/{booking['id']}/reject", json={"reason": "spam"}, headers=admin)
    assert response.status_code == 409


def test_complete_booking_with_cash(client, customer, completed_booking):
    assert completed_booking["status"] == "completed"
    assert completed_booking["paymentMode"] == "cash"
    assert completed_booking["completedAt"] is not None

    invoice = client.get(f"/api/bookings/{completed_booking['id']}/invoice", headers=customer)
    assert invoice.status_code == 200
    assert invoice.json()["invoiceNumber"] == "INV-1000"


def test_completing_without_payment_mode_is_rejected(client, admin, vendor_headers, assigned_booking):
    url = f"/api/bookings/{assigned_booking['id']}/status"

    response = client.patch(url, json={"status": "completed"}, headers=vendor_headers)

    assert response.status_code == 400
    booking = client.get(f"/api/bookings/{assigned_booking['id']}", headers=admin).json()
    assert booking["status"] == "assigned"
    assert booking["paymentMode"] is None


def test_status_update_validation(client, vendor_headers, assigned_booking):
    url = f"/api/bookings/{assigned_booking['id']}/status"

    assert client.patch(url, json={"status": "shipped"}, headers=vendor_headers).status_code == 400
    assert client.patch(
        url, json={"status": "completed", "paymentMode": "cheque"}, headers=vendor_headers
    ).status_code == 400
    assert client.patch(
        url, json={"status": "rejected", "paymentMode": "cash", "rejectionReason": "x"}, headers=vendor_headers
    ).status_code == 400
    assert client.patch(url, json={"status": "rejected"}, headers=vendor_headers).status_code == 400
    assert client.patch(url, json={"status": "pending"}, headers=vendor_headers).status_code == 409


def test_status_update_rejects_via_generic_path(client, vendor_headers, assigned_booking):
    response = client.patch(
        f"/api/bookings/{assigned_booking['id']}/status",
        json={"status": "rejected", "rejectionReason": "Customer unreachable"},
        headers=vendor_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"


def test_out_of_graph_transition_leaves_state_unchanged(client, admin, create_booking, completed_booking):
    pending = create_booking()
    response = client.patch(
        f"/api/bookings/{pending['id']}/status",
        json={"status": "completed", "paymentMode": "upi"},
        headers=admin,
    )
    assert response.status_code == 409
    assert client.get(f"/api/bookings/{pending['id']}", headers=admin).json()["status"] == "pending"

    again = client.patch(
        f"/api/bookings/{completed_booking['id']}/status",
        json={"status": "rejected", "rejectionReason": "changed my mind"},
        headers=admin,
    )
    assert again.status_code == 409
    assert client.get(f"/api/bookings/{completed_booking['id']}", headers=admin).json()["status"] == "completed"


def test_only_assigned_vendor_updates_status(client, admin, second_vendor, assigned_booking):
    response = client.patch(
        f"/api/bookings/{assigned_booking['id']}/status",
        json={"status": "completed", "paymentMode": "cash"},
        headers=as_user("9000000003"),
    )
    assert response.status_code == 403


def test_vendor_sees_only_assigned_bookings(client, vendor_headers, create_booking, assigned_booking):
    create_booking()
    bookings = client.get("/api/bookings", headers=vendor_headers).json()
    assert [b["id"] for b in bookings] == [assigned_booking["id"]]


def test_edit_pending_booking(client, customer, categories, create_booking):
    booking = create_booking()

    response = client.patch(
        f"/api/bookings/{booking['id']}",
        json={
            "customerAddress": "45 Link Road, Malad",
            "items": [{"categoryId": categories["Books"], "quantity": 4, "rate": "12"}],
        },
        headers=customer,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["customerAddress"] == "45 Link Road, Malad"
    assert body["customerName"] == "Asha Patil"
    assert [i["categoryName"] for i in body["items"]] == ["Books"]
    assert body["totalValue"] == "48.00"


def test_edit_rules(client, customer, other_customer, assigned_booking, create_booking):
    url = f"/api/bookings/{assigned_booking['id']}"
    assert client.patch(url, json={"customerName": "New Name"}, headers=customer).status_code == 409

    pending = create_booking()
    pending_url = f"/api/bookings/{pending['id']}"
    assert client.patch(pending_url, json={"customerName": "X"}, headers=other_customer).status_code == 403
    assert client.patch(pending_url, json={"pinCode": "12345a"}, headers=customer).status_code == 400


def test_delete_pending_booking(client, customer, admin, create_booking, assigned_booking):
    booking = create_booking()

    response = client.delete(f"/api/bookings/{booking['id']}", headers=customer)
    assert response.status_code == 200
    assert client.get(f"/api/bookings/{booking['id']}", headers=admin).status_code == 404

    assert client.delete(f"/api/bookings/{assigned_booking['id']}", headers=admin).status_code == 409


def test_vendor_location_updates(client, customer, vendor_headers, assigned_booking, create_booking):
    url = f"/api/bookings/{assigned_booking['id']}/location"

    response = client.patch(url, json={"latitude": 19.1197, "longitude": 72.8464}, headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["vendorLatitude"] == 19.1197

    assert client.patch(url, json={"latitude": 91, "longitude": 0}, headers=vendor_headers).status_code == 400
    assert client.patch(url, json={"latitude": 1, "longitude": 1}, headers=customer).status_code == 403


def test_payment_status(client, vendor_headers, assigned_booking, completed_booking):
    url = f"/api/bookings/{completed_booking['id']}/payment-status"

    assert client.patch(url, json={"paymentStatus": "refunded"}, headers=vendor_headers).status_code == 400

    response = client.patch(url, json={"paymentStatus": "paid"}, headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["paymentStatus"] == "paid"


def test_payment_status_requires_completion(client, vendor_headers, assigned_booking):
    response = client.patch(
        f"/api/bookings/{assigned_booking['id']}/payment-status",
        json={"paymentStatus": "paid"},
        headers=vendor_headers,
    )
    assert response.status_code == 409
