def post_review(client, headers, booking_id, rating=5, comment="Quick and fair weighing"):
    return client.post(
        "/api/reviews",
        json={"bookingId": booking_id, "rating": rating, "comment": comment},
        headers=headers,
    )


def test_customer_reviews_completed_booking(client, customer, vendor, completed_booking):
    response = post_review(client, customer, completed_booking["id"])

    assert response.status_code == 201
    body = response.json()
    assert body["vendorId"] == vendor["id"]
    assert body["rating"] == 5
    assert body["customerId"] == completed_booking["customerId"]


def test_review_only_once(client, customer, completed_booking):
    assert post_review(client, customer, completed_booking["id"]).status_code == 201
    assert post_review(client, customer, completed_booking["id"], rating=1).status_code == 409


def test_review_rules(client, customer, other_customer, create_booking, completed_booking):
    assert post_review(client, other_customer, completed_booking["id"]).status_code == 403
    assert post_review(client, customer, completed_booking["id"], rating=6).status_code == 400
    assert post_review(client, customer, completed_booking["id"], rating=0).status_code == 400
    assert post_review(client, customer, completed_booking["id"], comment="x" * 501).status_code == 400
    assert post_review(client, customer, 9999).status_code == 404

    pending = create_booking()
    assert post_review(client, customer, pending["id"]).status_code == 409


def test_vendor_reviews_with_average(client, admin, customer, vendor, vendor_headers, create_booking, completed_booking):
    post_review(client, customer, completed_booking["id"], rating=5)

    second = create_booking()
    client.patch(f"/api/bookings/{second['id']}/assign", json={"vendorId": vendor["id"]}, headers=admin)
    client.patch(
        f"/api/bookings/{second['id']}/status",
        json={"status": "completed", "paymentMode": "upi"},
        headers=vendor_headers,
    )
    post_review(client, customer, second["id"], rating=4, comment=None)

    response = client.get(f"/api/reviews/vendor/{vendor['id']}", headers=customer)

    assert response.status_code == 200
    body = response.json()
    assert body["reviewCount"] == 2
    assert body["averageRating"] == 4.5
    assert [r["rating"] for r in body["reviews"]] == [4, 5]
    assert body["reviews"][0]["comment"] is None
    assert body["reviews"][1]["customerName"] == "9876543210"


def test_vendor_without_reviews(client, customer, vendor):
    body = client.get(f"/api/reviews/vendor/{vendor['id']}", headers=customer).json()
    assert body == {"vendorId": vendor["id"], "averageRating": None, "reviewCount": 0, "reviews": []}


def test_reviews_for_unknown_vendor(client, customer):
    assert client.get("/api/reviews/vendor/9999", headers=customer).status_code == 404
