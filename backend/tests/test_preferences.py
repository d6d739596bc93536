from conftest import API, auth


def test_upsert_creates_then_updates(client, tenant):
    created = client.post(
        f"{API}/preferences",
        json={"max_price": 2000, "bedrooms": [1, 2], "pets": [{"type": "cat"}]},
        headers=auth(tenant),
    )
    updated = client.post(
        f"{API}/preferences", json={"min_price": 1200}, headers=auth(tenant)
    )

    assert created.status_code == 200
    assert updated.status_code == 200
    assert updated.json()["id"] == created.json()["id"]
    data = updated.json()
    assert data["user_id"] == tenant["id"]
    assert data["min_price"] == 1200
    assert data["max_price"] == 2000
    assert data["bedrooms"] == [1, 2]
    assert data["pets"][0]["type"] == "cat"
    assert data["amenities"] == []
    assert data["outdoor_space"] is False


def test_operator_cannot_have_preferences(client, operator):
    response = client.post(f"{API}/preferences", json={"max_price": 10}, headers=auth(operator))

    assert response.status_code == 403
    assert response.json()["code"] == "permission_denied"


def test_get_and_delete(client, tenant):
    assert client.get(f"{API}/preferences", headers=auth(tenant)).status_code == 404

    client.post(f"{API}/preferences", json={"hobbies": ["climbing"]}, headers=auth(tenant))
    assert client.get(f"{API}/preferences", headers=auth(tenant)).json()["hobbies"] == ["climbing"]

    assert client.delete(f"{API}/preferences", headers=auth(tenant)).status_code == 204
    assert client.delete(f"{API}/preferences", headers=auth(tenant)).status_code == 404


def test_update_requires_existing_preferences(client, tenant):
    response = client.put(f"{API}/preferences", json={"max_price": 900}, headers=auth(tenant))
    assert response.status_code == 404


def test_inverted_ranges_rejected(client, tenant):
    for payload in (
        {"min_price": 3000, "max_price": 1000},
        {"min_square_meters": 90, "max_square_meters": 40},
        {"move_in_date": "2026-12-01", "move_out_date": "2026-11-01"},
        {"min_bedrooms": 3, "max_bedrooms": 1},
    ):
        response = client.post(f"{API}/preferences", json=payload, headers=auth(tenant))
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"


def test_partial_update_checked_against_stored_range(client, tenant):
    client.post(f"{API}/preferences", json={"max_price": 1000}, headers=auth(tenant))

    response = client.put(f"{API}/preferences", json={"min_price": 1500}, headers=auth(tenant))

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_input"
    assert client.get(f"{API}/preferences", headers=auth(tenant)).json()["min_price"] is None


def test_negative_values_rejected(client, tenant):
    for payload in ({"min_price": -1}, {"bedrooms": [-2]}, {"number_of_pets": -1}):
        response = client.post(f"{API}/preferences", json=payload, headers=auth(tenant))
        assert response.status_code == 422


def test_explicit_null_list_becomes_empty(client, tenant):
    client.post(f"{API}/preferences", json={"amenities": ["gym"]}, headers=auth(tenant))

    data = client.put(f"{API}/preferences", json={"amenities": None}, headers=auth(tenant)).json()

    assert data["amenities"] == []


def test_deleting_user_removes_preferences(client, admin, tenant):
    client.post(f"{API}/preferences", json={"max_price": 800}, headers=auth(tenant))

    assert client.delete(f"{API}/users/{tenant['id']}", headers=auth(admin)).status_code == 204

    recreated = client.post(
        f"{API}/users", json={"email": tenant["email"], "role": "tenant"}
    ).json()
    assert client.get(f"{API}/preferences", headers=auth(recreated)).status_code == 404
