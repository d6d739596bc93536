import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import InvalidStatusTransition, InvalidStatusValue
from app.main import create_app
from app.models.enums import BookingRequestStatus as S
from app.services.booking_requests import (
    ALLOWED_TRANSITIONS,
    PIPELINE,
    allowed_next,
    check_transition,
    parse_status,
)
from conftest import API, auth, make_settings, promote

ALL_TOKENS = [
    "new",
    "contacting",
    "kyc_referencing",
    "approved_viewing",
    "viewing",
    "contract",
    "deposit",
    "full_payment",
    "move_in",
    "rented",
    "cancel_booking",
]


# --- state machine ---

def test_status_set_is_closed():
    assert [s.value for s in S] == ALL_TOKENS
    for token in ALL_TOKENS:
        assert parse_status(token).value == token


@pytest.mark.parametrize(
    "token", ["pending", "NEW", "", "cancelled", "rented ", " rented", "x" * 60]
)
def test_unknown_status_token_rejected(token):
    with pytest.raises(InvalidStatusValue):
        parse_status(token)


def test_terminal_states_have_no_transitions():
    assert S.RENTED.is_terminal
    assert S.CANCEL_BOOKING.is_terminal
    assert allowed_next(S.RENTED) == frozenset()
    assert allowed_next(S.CANCEL_BOOKING) == frozenset()
    assert not S.NEW.is_terminal


def test_open_stages_move_forward_or_cancel():
    for position, current in enumerate(PIPELINE[:-1]):
        later = set(PIPELINE[position + 1:])
        assert ALLOWED_TRANSITIONS[current] == frozenset(later | {S.CANCEL_BOOKING})
        assert not set(PIPELINE[:position]) & ALLOWED_TRANSITIONS[current]


def test_check_transition():
    check_transition(S.NEW, S.CONTACTING)
    check_transition(S.NEW, S.CANCEL_BOOKING)
    check_transition(S.NEW, S.RENTED)
    check_transition(S.CONTACTING, S.CONTRACT)
    check_transition(S.VIEWING, S.VIEWING)

    with pytest.raises(InvalidStatusTransition):
        check_transition(S.CONTACTING, S.NEW)
    with pytest.raises(InvalidStatusTransition):
        check_transition(S.CONTRACT, S.VIEWING)
    with pytest.raises(InvalidStatusTransition):
        check_transition(S.RENTED, S.CANCEL_BOOKING)
    with pytest.raises(InvalidStatusTransition):
        check_transition(S.CANCEL_BOOKING, S.NEW)


# --- API ---

def _book(client, tenant, prop):
    return client.post(
        f"{API}/booking-requests",
        json={"property_id": prop["id"]},
        headers=auth(tenant),
    )


def _set_status(client, admin, booking_id, token):
    return client.patch(
        f"{API}/booking-requests/{booking_id}/status",
        json={"status": token},
        headers=auth(admin),
    )


def test_create_booking_request(client, tenant, make_property):
    prop = make_property()

    response = _book(client, tenant, prop)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "new"
    assert data["tenant_id"] == tenant["id"]
    assert data["property_id"] == prop["id"]
    assert data["is_terminal"] is False
    assert data["allowed_transitions"] == sorted(ALL_TOKENS[1:])


def test_request_shows_property_and_tenant(client, admin, tenant, make_property):
    prop = make_property(title="Canal loft", price=1500)
    booking = _book(client, tenant, prop).json()

    assert booking["property"]["title"] == "Canal loft"
    assert booking["property"]["price"] == 1500
    assert booking["tenant"]["email"] == tenant["email"]
    assert booking["tenant"]["role"] == "tenant"
    assert booking["tenant"]["cv_share_uuid"] is None

    share_uuid = client.post(f"{API}/tenant-cv/share", headers=auth(tenant)).json()["share_uuid"]
    listed = client.get(f"{API}/booking-requests", headers=auth(admin)).json()
    mine = client.get(f"{API}/booking-requests/me", headers=auth(tenant)).json()

    assert listed[0]["property"]["id"] == prop["id"]
    assert listed[0]["tenant"]["cv_share_uuid"] == share_uuid
    assert mine[0]["tenant"]["cv_share_uuid"] == share_uuid


def test_duplicate_booking_request_rejected(client, tenant, make_property):
    prop = make_property()
    first = _book(client, tenant, prop)
    assert first.status_code == 201

    second = _book(client, tenant, prop)

    assert second.status_code == 409
    assert second.json()["code"] == "duplicate_booking_request"

    mine = client.get(f"{API}/booking-requests/me", headers=auth(tenant)).json()
    assert [b["id"] for b in mine] == [first.json()["id"]]


def test_duplicate_rejected_even_after_cancellation(client, admin, tenant, make_property):
    prop = make_property()
    booking = _book(client, tenant, prop).json()
    assert _set_status(client, admin, booking["id"], "cancel_booking").status_code == 200

    response = _book(client, tenant, prop)

    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_booking_request"


def test_same_property_different_tenants(client, make_user, make_property):
    prop = make_property()
    first, second = make_user("tenant"), make_user("tenant")

    assert _book(client, first, prop).status_code == 201
    assert _book(client, second, prop).status_code == 201


def test_booking_unknown_property(client, tenant):
    response = client.post(
        f"{API}/booking-requests",
        json={"property_id": "00000000-0000-0000-0000-000000000001"},
        headers=auth(tenant),
    )

    assert response.status_code == 404
    assert response.json()["code"] == "referential_violation"


def test_operator_cannot_book(client, operator, make_property):
    prop = make_property()
    assert _book(client, operator, prop).status_code == 403


def test_admin_books_on_behalf_of_tenant(client, admin, tenant, make_property):
    prop = make_property()

    response = client.post(
        f"{API}/booking-requests",
        json={"property_id": prop["id"], "tenant_id": tenant["id"]},
        headers=auth(admin),
    )

    assert response.status_code == 201
    assert response.json()["tenant_id"] == tenant["id"]


def test_admin_cannot_book_for_operator(client, admin, operator, make_property):
    prop = make_property()

    response = client.post(
        f"{API}/booking-requests",
        json={"property_id": prop["id"], "tenant_id": operator["id"]},
        headers=auth(admin),
    )

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_input"


def test_walk_full_pipeline(client, admin, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()

    for token in ALL_TOKENS[1:10]:
        response = _set_status(client, admin, booking["id"], token)
        assert response.status_code == 200, response.text
        assert response.json()["status"] == token

    final = response.json()
    assert final["status"] == "rented"
    assert final["is_terminal"] is True
    assert final["allowed_transitions"] == []


def test_skipping_ahead_is_allowed(client, admin, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()

    response = _set_status(client, admin, booking["id"], "contract")

    assert response.status_code == 200
    assert response.json()["allowed_transitions"] == [
        "cancel_booking", "deposit", "full_payment", "move_in", "rented"
    ]


def test_moving_backward_is_rejected(client, admin, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()
    assert _set_status(client, admin, booking["id"], "contract").status_code == 200

    response = _set_status(client, admin, booking["id"], "viewing")

    assert response.status_code == 409
    assert response.json()["code"] == "invalid_status_transition"
    stored = client.get(f"{API}/booking-requests/{booking['id']}", headers=auth(admin)).json()
    assert stored["status"] == "contract"


def test_lifecycle_scenario(client, admin, make_user, make_property):
    prop = make_property()
    tenant_a, tenant_b = make_user("tenant"), make_user("tenant")

    first = _book(client, tenant_a, prop)
    assert first.status_code == 201
    assert first.json()["status"] == "new"
    assert _book(client, tenant_a, prop).status_code == 409
    assert _book(client, tenant_b, prop).status_code == 201

    rented = _set_status(client, admin, first.json()["id"], "rented")
    assert rented.status_code == 200
    assert rented.json()["is_terminal"] is True

    reopened = _set_status(client, admin, first.json()["id"], "new")
    assert reopened.status_code == 409
    assert reopened.json()["code"] == "invalid_status_transition"


def test_terminal_status_is_final(client, admin, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()
    assert _set_status(client, admin, booking["id"], "cancel_booking").status_code == 200

    response = _set_status(client, admin, booking["id"], "contacting")

    assert response.status_code == 409
    assert response.json()["code"] == "invalid_status_transition"


def test_rewriting_current_status_is_allowed(client, admin, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()

    response = _set_status(client, admin, booking["id"], "new")

    assert response.status_code == 200
    assert response.json()["status"] == "new"


@pytest.mark.parametrize("token", ["approved", "", " rented ", "x" * 60])
def test_invalid_status_token(client, admin, tenant, make_property, token):
    booking = _book(client, tenant, make_property()).json()

    response = _set_status(client, admin, booking["id"], token)

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_status_value"


def test_only_admin_changes_status(client, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()
    assert _set_status(client, tenant, booking["id"], "contacting").status_code == 403


def test_status_update_unknown_request(client, admin):
    response = _set_status(client, admin, "00000000-0000-0000-0000-000000000001", "contacting")
    assert response.status_code == 404


def test_any_status_accepted_when_transitions_not_enforced():
    settings = make_settings(enforce_booking_transitions=False)
    with TestClient(create_app(settings)) as client:
        users = {}
        for role in ("operator", "tenant"):
            response = client.post(
                f"{API}/users", json={"email": f"{role}@example.com", "role": role}
            )
            users[role] = response.json()
        staff = client.post(f"{API}/users", json={"email": "staff@example.com"}).json()
        users["admin"] = promote(client, staff)
        prop = client.post(
            f"{API}/properties", json={"title": "Loft"}, headers=auth(users["operator"])
        ).json()
        booking = _book(client, users["tenant"], prop).json()

        for token in ["rented", "new", "cancel_booking", "viewing"]:
            response = _set_status(client, users["admin"], booking["id"], token)
            assert response.status_code == 200
            assert response.json()["status"] == token
            assert response.json()["allowed_transitions"] == sorted(
                t for t in ALL_TOKENS if t != token
            )

        assert _set_status(client, users["admin"], booking["id"], "done").status_code == 422


def test_list_filters(client, admin, make_user, make_property):
    prop_a, prop_b = make_property(title="A"), make_property(title="B")
    tenant = make_user("tenant")
    first = _book(client, tenant, prop_a).json()
    _book(client, tenant, prop_b)
    _set_status(client, admin, first["id"], "contacting")

    everything = client.get(f"{API}/booking-requests", headers=auth(admin)).json()
    contacting = client.get(
        f"{API}/booking-requests", params={"status": "contacting"}, headers=auth(admin)
    ).json()
    for_a = client.get(
        f"{API}/booking-requests/me", params={"property_id": prop_a["id"]}, headers=auth(tenant)
    ).json()

    assert len(everything) == 2
    assert [b["id"] for b in contacting] == [first["id"]]
    assert [b["id"] for b in for_a] == [first["id"]]

    bad = client.get(f"{API}/booking-requests", params={"status": "nope"}, headers=auth(admin))
    assert bad.status_code == 422


def test_property_operator_sees_requests(client, make_user, operator, tenant, make_property):
    prop = make_property()
    _book(client, tenant, prop)
    other_operator = make_user("operator")

    mine = client.get(f"{API}/booking-requests/property/{prop['id']}", headers=auth(operator))
    theirs = client.get(
        f"{API}/booking-requests/property/{prop['id']}", headers=auth(other_operator)
    )

    assert mine.status_code == 200
    assert len(mine.json()) == 1
    assert theirs.status_code == 403


def test_other_tenant_cannot_read_request(client, make_user, tenant, make_property):
    booking = _book(client, tenant, make_property()).json()
    stranger = make_user("tenant")

    response = client.get(f"{API}/booking-requests/{booking['id']}", headers=auth(stranger))

    assert response.status_code == 404


def test_deleting_property_removes_its_requests(client, admin, operator, tenant, make_property):
    prop = make_property()
    _book(client, tenant, prop)

    assert client.delete(f"{API}/properties/{prop['id']}", headers=auth(operator)).status_code == 204

    assert client.get(f"{API}/booking-requests", headers=auth(admin)).json() == []


def test_deleting_tenant_removes_their_requests(client, admin, tenant, make_property):
    _book(client, tenant, make_property())

    assert client.delete(f"{API}/users/me", headers=auth(tenant)).status_code == 204

    assert client.get(f"{API}/booking-requests", headers=auth(admin)).json() == []
