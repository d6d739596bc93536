from conftest import API, auth


def test_create_building_defaults(client, admin, operator):
    response = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": operator["id"], "type_of_unit": ["studio", "1-bed"]},
        headers=auth(admin),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["tenant_types"] == ["family"]
    assert data["type_of_unit"] == ["studio", "1-bed"]
    assert data["amenities"] == []
    assert data["is_concierge"] is False


def test_building_operator_must_be_an_operator(client, admin, tenant):
    response = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": tenant["id"]},
        headers=auth(admin),
    )

    assert response.status_code == 404
    assert response.json()["code"] == "referential_violation"


def test_only_admin_manages_buildings(client, operator):
    response = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": operator["id"]},
        headers=auth(operator),
    )
    assert response.status_code == 403


def test_update_and_filter(client, admin, make_user, operator):
    other = make_user("operator")
    building = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": operator["id"]},
        headers=auth(admin),
    ).json()
    client.post(
        f"{API}/buildings", json={"name": "Oak House", "operator_id": other["id"]}, headers=auth(admin)
    )

    renamed = client.patch(
        f"{API}/buildings/{building['id']}",
        json={"name": "Elm Court East", "metro_stations": [{"label": "Bow Road", "destination": 4}]},
        headers=auth(admin),
    )
    cleared = client.patch(
        f"{API}/buildings/{building['id']}", json={"name": ""}, headers=auth(admin)
    )
    mine = client.get(
        f"{API}/buildings", params={"operator_id": operator["id"]}, headers=auth(admin)
    ).json()

    assert renamed.json()["name"] == "Elm Court East"
    assert renamed.json()["metro_stations"][0]["label"] == "Bow Road"
    assert cleared.status_code == 422
    assert [b["name"] for b in mine] == ["Elm Court East"]


def test_list_operators(client, admin, operator, tenant):
    operators = client.get(f"{API}/buildings/operators", headers=auth(admin)).json()
    assert sorted(u["id"] for u in operators) == sorted([admin["id"], operator["id"]])


def test_public_building(client, admin, operator):
    building = client.post(
        f"{API}/buildings",
        json={"name": "Elm Court", "operator_id": operator["id"]},
        headers=auth(admin),
    ).json()

    assert client.get(f"{API}/buildings/public/{building['id']}").json()["name"] == "Elm Court"
    assert client.get(f"{API}/buildings/public/00000000-0000-0000-0000-000000000001").status_code == 404
