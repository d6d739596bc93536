from conftest import API, auth


def test_register_and_me(client):
    response = client.post(
        f"{API}/users",
        json={"email": "Jane.Doe@Example.com", "full_name": "Jane Doe"},
    )

    assert response.status_code == 201
    user = response.json()
    assert user["email"] == "jane.doe@example.com"
    assert user["role"] == "tenant"

    me = client.get(f"{API}/users/me", headers=auth(user))
    assert me.json()["id"] == user["id"]


def test_admin_cannot_be_registered(client):
    response = client.post(
        f"{API}/users", json={"email": "staff@example.com", "role": "admin"}
    )

    assert response.status_code == 403
    assert response.json()["code"] == "permission_denied"


def test_operator_can_be_registered(client):
    response = client.post(
        f"{API}/users", json={"email": "lettings@example.com", "role": "operator"}
    )

    assert response.status_code == 201
    assert response.json()["role"] == "operator"


def test_duplicate_email(client, tenant):
    response = client.post(f"{API}/users", json={"email": tenant["email"].upper()})

    assert response.status_code == 409
    assert response.json()["code"] == "conflict"


def test_invalid_payload(client):
    response = client.post(f"{API}/users", json={"email": "not-an-email"})

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_update_me(client, tenant):
    response = client.patch(
        f"{API}/users/me",
        json={"phone": "+44 20 7946 0000", "nationality": "British"},
        headers=auth(tenant),
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "+44 20 7946 0000"
    assert response.json()["role"] == "tenant"


def test_unknown_user_header(client):
    response = client.get(
        f"{API}/users/me", headers={"X-User-Id": "00000000-0000-0000-0000-000000000001"}
    )
    assert response.status_code == 401


def test_admin_lists_users(client, admin, operator, tenant):
    everyone = client.get(f"{API}/users", headers=auth(admin)).json()
    operators = client.get(f"{API}/users", params={"role": "operator"}, headers=auth(admin)).json()
    paged = client.get(f"{API}/users", params={"limit": 2, "page": 2}, headers=auth(admin)).json()

    assert everyone["total"] == 3
    assert [u["id"] for u in operators["data"]] == [operator["id"]]
    assert paged["total_pages"] == 2
    assert len(paged["data"]) == 1


def test_non_admin_cannot_list_users(client, tenant):
    assert client.get(f"{API}/users", headers=auth(tenant)).status_code == 403


def test_admin_changes_role(client, admin, tenant):
    response = client.put(
        f"{API}/users/{tenant['id']}/role", json={"role": "operator"}, headers=auth(admin)
    )

    assert response.status_code == 200
    assert response.json()["role"] == "operator"
    assert client.get(f"{API}/users/me", headers=auth(tenant)).json()["role"] == "operator"


def test_admin_deletes_user(client, admin, tenant):
    assert client.delete(f"{API}/users/{tenant['id']}", headers=auth(admin)).status_code == 204
    assert client.get(f"{API}/users/{tenant['id']}", headers=auth(admin)).status_code == 404
    assert client.get(f"{API}/users/me", headers=auth(tenant)).status_code == 401


def test_deleting_operator_removes_buildings_and_listings(client, admin, operator, make_property):
    building = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": operator["id"]},
        headers=auth(admin),
    ).json()
    prop = make_property()

    assert client.delete(f"{API}/users/{operator['id']}", headers=auth(admin)).status_code == 204

    assert client.get(f"{API}/buildings/public/{building['id']}").status_code == 404
    assert client.get(f"{API}/properties/public/{prop['id']}").status_code == 404
