# tests/test_orders.py
from .conftest import API, bearer, error_code, make_order, make_user, sign_in

ORDER = {"movie_name": "Alien", "quality": "1080p", "audio_preference": "latino"}


def _create(client, headers, **overrides):
    return client.post(f"{API}/orders", headers=headers, json={**ORDER, **overrides})


def test_sign_up_order_and_list_own_history(client):
    r = client.post(
        f"{API}/auth/sign-up",
        json={"email": "a@x.com", "name": "Ana", "password": "secret1"},
    )
    assert r.status_code == 201
    token = sign_in(client, "a@x.com", "secret1")

    r = _create(client, bearer(token))
    assert r.status_code == 201, r.text

    orders = client.get(f"{API}/orders/me", headers=bearer(token)).json()
    assert len(orders) == 1
    assert orders[0]["status"] == "pending"
    assert orders[0]["movie_name"] == "Alien"


def test_new_order_is_pending_with_equal_timestamps(client, user_headers):
    r = _create(client, user_headers, movie_year=1979, notes="  with subs  ")
    order = r.json()
    assert order["status"] == "pending"
    assert order["created_at"] == order["updated_at"]
    assert order["movie_year"] == 1979
    assert order["notes"] == "with subs"


def test_create_requires_a_valid_session(client):
    r = _create(client, {})
    assert r.status_code == 401
    assert error_code(r) == "InvalidSession"

    r = _create(client, bearer("expired-or-unknown"))
    assert r.status_code == 401


def test_create_rejects_values_outside_enumerations(client, user_headers):
    assert _create(client, user_headers, quality="8k").status_code == 422
    assert _create(client, user_headers, audio_preference="klingon").status_code == 422
    assert _create(client, user_headers, movie_name="   ").status_code == 422
    assert _create(client, user_headers, status="completed").status_code == 422


def test_user_sees_only_own_orders_newest_first(client, user_headers):
    other_id = make_user(email="b@x.com")
    make_order(other_id, movie_name="Other")

    _create(client, user_headers, movie_name="First")
    _create(client, user_headers, movie_name="Second")

    orders = client.get(f"{API}/orders/me", headers=user_headers).json()
    assert [o["movie_name"] for o in orders] == ["Second", "First"]


def test_user_cannot_read_someone_elses_order(client, user_headers):
    other_id = make_user(email="b@x.com")
    order_id = make_order(other_id)

    r = client.get(f"{API}/orders/me/{order_id}", headers=user_headers)
    assert r.status_code == 404
    assert error_code(r) == "NotFound"


def test_admin_list_joins_user_and_filters(client, admin_headers):
    ana = make_user(email="ana@x.com", name="Ana")
    bob = make_user(email="bob@x.com", name="Bob")
    make_order(ana, movie_name="Alien", status="pending")
    make_order(ana, movie_name="Aliens", status="completed")
    make_order(bob, movie_name="Heat", status="pending")

    orders = client.get(f"{API}/orders", headers=admin_headers).json()
    assert len(orders) == 3
    heat = next(o for o in orders if o["movie_name"] == "Heat")
    assert heat["user"] == {"id": str(bob), "name": "Bob", "email": "bob@x.com"}

    r = client.get(f"{API}/orders", headers=admin_headers, params={"status": "pending"})
    assert sorted(o["movie_name"] for o in r.json()) == ["Alien", "Heat"]

    r = client.get(f"{API}/orders", headers=admin_headers, params={"user_id": str(ana)})
    assert sorted(o["movie_name"] for o in r.json()) == ["Alien", "Aliens"]

    r = client.get(f"{API}/orders", headers=admin_headers, params={"search": "ALIEN"})
    assert sorted(o["movie_name"] for o in r.json()) == ["Alien", "Aliens"]

    r = client.get(f"{API}/orders", headers=admin_headers, params={"search": "A_i"})
    assert r.json() == []

    r = client.get(f"{API}/orders", headers=admin_headers, params={"search": "%"})
    assert r.json() == []

    r = client.get(f"{API}/orders", headers=admin_headers, params={"status": "shipped"})
    assert r.status_code == 422


def test_admin_endpoints_reject_regular_users(client, user_headers):
    order_id = _create(client, user_headers).json()["id"]

    assert client.get(f"{API}/orders", headers=user_headers).status_code == 403
    r = client.patch(
        f"{API}/orders/{order_id}/status",
        headers=user_headers,
        json={"status": "completed"},
    )
    assert r.status_code == 403
    assert client.post(f"{API}/orders/{order_id}/advance", headers=user_headers).status_code == 403
    assert client.delete(f"{API}/orders/{order_id}", headers=user_headers).status_code == 403


def test_update_status_allows_any_transition_and_sets_notes(client, admin_headers):
    user_id = make_user(email="a@x.com")
    order_id = make_order(user_id, status="completed")

    r = client.patch(
        f"{API}/orders/{order_id}/status",
        headers=admin_headers,
        json={"status": "pending", "notes": "re-opened"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["status"] == "pending"
    assert body["notes"] == "re-opened"
    assert body["updated_at"] > body["created_at"]

    r = client.patch(
        f"{API}/orders/{order_id}/status",
        headers=admin_headers,
        json={"status": "cancelled"},
    )
    assert r.json()["status"] == "cancelled"
    assert r.json()["notes"] == "re-opened"


def test_update_status_rejects_unknown_status(client, admin_headers):
    order_id = make_order(make_user(email="a@x.com"))
    r = client.patch(
        f"{API}/orders/{order_id}/status",
        headers=admin_headers,
        json={"status": "shipped"},
    )
    assert r.status_code == 422


def test_advance_follows_linear_flow_and_stops_at_completed(client, admin_headers):
    order_id = make_order(make_user(email="a@x.com"))

    statuses = [
        client.post(f"{API}/orders/{order_id}/advance", headers=admin_headers).json()["status"]
        for _ in range(3)
    ]
    assert statuses == ["processing", "completed", "completed"]


def test_advance_leaves_cancelled_untouched(client, admin_headers):
    order_id = make_order(make_user(email="a@x.com"), status="cancelled")

    r = client.post(f"{API}/orders/{order_id}/advance", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"


def test_missing_order_is_not_found(client, admin_headers):
    missing = "00000000-0000-0000-0000-000000000000"

    for r in (
        client.patch(f"{API}/orders/{missing}/status", headers=admin_headers, json={"status": "completed"}),
        client.post(f"{API}/orders/{missing}/advance", headers=admin_headers),
        client.delete(f"{API}/orders/{missing}", headers=admin_headers),
        client.get(f"{API}/orders/{missing}", headers=admin_headers),
    ):
        assert r.status_code == 404
        assert r.json()["detail"]["message"] == "Order not found"


def test_delete_order(client, admin_headers):
    user_id = make_user(email="a@x.com")
    order_id = make_order(user_id)

    assert client.delete(f"{API}/orders/{order_id}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/orders/{order_id}", headers=admin_headers).status_code == 404


def test_admin_creates_order_for_user(client, admin_headers):
    user_id = make_user(email="a@x.com")

    r = client.post(f"{API}/orders/users/{user_id}", headers=admin_headers, json=ORDER)
    assert r.status_code == 201
    assert r.json()["user_id"] == str(user_id)

    r = client.post(
        f"{API}/orders/users/00000000-0000-0000-0000-000000000000",
        headers=admin_headers,
        json=ORDER,
    )
    assert r.status_code == 404
    assert r.json()["detail"]["message"] == "User not found"
