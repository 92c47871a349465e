def test_seeded_categories_are_public(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    categories = {c["name"]: c for c in response.json()}
    assert len(categories) == 9
    assert categories["Plastic"] == {
        "id": categories["Plastic"]["id"],
        "name": "Plastic",
        "unit": "kg",
        "minRate": "10.00",
        "maxRate": "20.00",
        "icon": "Trash2",
    }
    assert categories["Old AC"]["unit"] == "unit"


def test_admin_creates_category(client, admin):
    response = client.post(
        "/api/categories",
        json={"name": "E-Waste", "unit": "kg", "minRate": "30", "maxRate": "45.5", "icon": "Cpu"},
        headers=admin,
    )

    assert response.status_code == 201
    assert response.json()["maxRate"] == "45.50"
    assert len(client.get("/api/categories").json()) == 10


def test_category_validation(client, admin, customer):
    base = {"name": "Glass", "unit": "kg", "minRate": "2", "maxRate": "4"}

    assert client.post("/api/categories", json=base, headers=customer).status_code == 403
    assert client.post("/api/categories", json={**base, "unit": "litre"}, headers=admin).status_code == 400
    assert client.post("/api/categories", json={**base, "minRate": "5"}, headers=admin).status_code == 400
    assert client.post("/api/categories", json={**base, "name": "Paper"}, headers=admin).status_code == 409

    created = client.post("/api/categories", json=base, headers=admin)
    assert created.status_code == 201
    assert created.json()["icon"] == "Package"


def test_update_category(client, admin, categories):
    url = f"/api/categories/{categories['Paper']}"

    response = client.patch(url, json={"maxRate": "16"}, headers=admin)
    assert response.status_code == 200
    assert response.json()["maxRate"] == "16.00"
    assert response.json()["minRate"] == "8.00"

    assert client.patch(url, json={"minRate": "20"}, headers=admin).status_code == 400
    assert client.patch(url, json={"name": "Books"}, headers=admin).status_code == 409
    assert client.patch("/api/categories/9999", json={"icon": "X"}, headers=admin).status_code == 404


def test_delete_category(client, admin, categories, create_booking):
    assert client.delete(f"/api/categories/{categories['Clothes']}", headers=admin).status_code == 200

    create_booking(category="Plastic")
    response = client.delete(f"/api/categories/{categories['Plastic']}", headers=admin)
    assert response.status_code == 409
    assert "Plastic" in {c["name"] for c in client.get("/api/categories").json()}
