from conftest import API, auth


def test_add_is_idempotent(client, tenant, make_property):
    prop = make_property()

    first = client.post(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))
    second = client.post(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))

    assert first.status_code == 200
    assert second.json() == {"property_id": prop["id"], "is_shortlisted": True}
    assert client.get(f"{API}/shortlist/count", headers=auth(tenant)).json() == {"count": 1}


def test_list_and_check(client, tenant, make_property):
    saved = make_property(title="Saved")
    other = make_property(title="Other")
    client.post(f"{API}/shortlist/{saved['id']}", headers=auth(tenant))

    listed = client.get(f"{API}/shortlist", headers=auth(tenant)).json()
    check_saved = client.get(f"{API}/shortlist/check/{saved['id']}", headers=auth(tenant)).json()
    check_other = client.get(f"{API}/shortlist/check/{other['id']}", headers=auth(tenant)).json()

    assert [p["title"] for p in listed] == ["Saved"]
    assert check_saved["is_shortlisted"] is True
    assert check_other["is_shortlisted"] is False


def test_remove_is_idempotent(client, tenant, make_property):
    prop = make_property()
    client.post(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))

    first = client.delete(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))
    second = client.delete(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))

    assert first.json()["is_shortlisted"] is False
    assert second.status_code == 200
    assert client.get(f"{API}/shortlist/count", headers=auth(tenant)).json() == {"count": 0}


def test_unknown_property(client, tenant):
    response = client.post(
        f"{API}/shortlist/00000000-0000-0000-0000-000000000001", headers=auth(tenant)
    )
    assert response.status_code == 404


def test_deleted_property_leaves_shortlist(client, operator, tenant, make_property):
    prop = make_property()
    client.post(f"{API}/shortlist/{prop['id']}", headers=auth(tenant))

    client.delete(f"{API}/properties/{prop['id']}", headers=auth(operator))

    assert client.get(f"{API}/shortlist", headers=auth(tenant)).json() == []


def test_operator_has_no_shortlist(client, operator):
    assert client.get(f"{API}/shortlist", headers=auth(operator)).status_code == 403
