# tests/test_users.py
from sqlmodel import Session, select

from app.database import engine
from app.models.order import Order
from app.models.user import User, UserSession
from .conftest import API, bearer, error_code, make_order, make_user, sign_in


# -------- Self profile --------


def test_update_profile_patches_only_given_fields(client):
    make_user(email="a@x.com", name="Ana")
    headers = bearer(sign_in(client, "a@x.com"))

    r = client.patch(f"{API}/users/me", headers=headers, json={"phone": "+34 600 000 000"})
    assert r.status_code == 200, r.text
    assert r.json()["phone"] == "+34 600 000 000"
    assert r.json()["name"] == "Ana"

    r = client.patch(f"{API}/users/me", headers=headers, json={"name": "Ana Maria"})
    assert r.json()["name"] == "Ana Maria"
    assert r.json()["phone"] == "+34 600 000 000"
    assert "password_hash" not in r.json()


def test_update_profile_requires_valid_session(client):
    r = client.patch(f"{API}/users/me", headers=bearer("nope"), json={"name": "X"})
    assert r.status_code == 401
    assert error_code(r) == "InvalidSession"


def test_change_password_with_wrong_current_password_applies_nothing(client):
    make_user(email="a@x.com", name="Ana")
    headers = bearer(sign_in(client, "a@x.com"))

    r = client.patch(
        f"{API}/users/me",
        headers=headers,
        json={"name": "Changed", "current_password": "wrong!!", "new_password": "newpass1"},
    )
    assert r.status_code == 400
    assert error_code(r) == "WrongPassword"

    me = client.get(f"{API}/users/me", headers=headers).json()
    assert me["name"] == "Ana"
    sign_in(client, "a@x.com", "secret1")


def test_change_password(client):
    make_user(email="a@x.com")
    headers = bearer(sign_in(client, "a@x.com"))

    r = client.patch(
        f"{API}/users/me",
        headers=headers,
        json={"current_password": "secret1", "new_password": "newpass1"},
    )
    assert r.status_code == 200, r.text

    sign_in(client, "a@x.com", "newpass1")
    r = client.post(f"{API}/auth/sign-in", json={"email": "a@x.com", "password": "secret1"})
    assert error_code(r) == "InvalidCredentials"


def test_new_password_without_current_password_is_rejected(client):
    make_user(email="a@x.com")
    headers = bearer(sign_in(client, "a@x.com"))

    r = client.patch(f"{API}/users/me", headers=headers, json={"new_password": "newpass1"})
    assert r.status_code == 422
    assert error_code(r) == "ValidationError"


# -------- Admin --------


def test_admin_endpoints_reject_regular_users(client, user_headers):
    r = client.get(f"{API}/users", headers=user_headers)
    assert r.status_code == 403
    assert error_code(r) == "Unauthorized"

    assert client.get(f"{API}/users").status_code == 401


def test_admin_list_users_filters(client, admin_headers):
    make_user(email="maria@x.com", name="Maria")
    make_user(email="pedro@x.com", name="Pedro", is_active=False)

    r = client.get(f"{API}/users", headers=admin_headers, params={"search": "MAR"})
    assert [u["email"] for u in r.json()] == ["maria@x.com"]

    r = client.get(f"{API}/users", headers=admin_headers, params={"search": "m_r"})
    assert r.json() == []

    r = client.get(f"{API}/users", headers=admin_headers, params={"search": "%"})
    assert r.json() == []

    r = client.get(f"{API}/users", headers=admin_headers, params={"role": "admin"})
    assert [u["email"] for u in r.json()] == ["admin@example.com"]

    r = client.get(f"{API}/users", headers=admin_headers, params={"is_active": "false"})
    assert [u["email"] for u in r.json()] == ["pedro@x.com"]

    r = client.get(f"{API}/users", headers=admin_headers)
    assert len(r.json()) == 3


def test_admin_create_user_with_role(client, admin_headers):
    r = client.post(
        f"{API}/users",
        headers=admin_headers,
        json={"email": "Staff@X.com", "name": "Staff", "password": "secret1", "role": "admin"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["email"] == "staff@x.com"
    assert r.json()["role"] == "admin"

    token = sign_in(client, "staff@x.com")
    assert client.get(f"{API}/auth/is-admin", headers=bearer(token)).json()["is_admin"] is True

    r = client.post(
        f"{API}/users",
        headers=admin_headers,
        json={"email": "staff@x.com", "name": "Again", "password": "secret1"},
    )
    assert r.status_code == 409
    assert error_code(r) == "DuplicateEmail"


def test_admin_create_user_rejects_unknown_role(client, admin_headers):
    r = client.post(
        f"{API}/users",
        headers=admin_headers,
        json={"email": "x@x.com", "name": "X", "password": "secret1", "role": "root"},
    )
    assert r.status_code == 422


def test_admin_update_user(client, admin_headers):
    user_id = make_user(email="a@x.com", name="Ana")
    make_user(email="taken@x.com")

    r = client.patch(f"{API}/users/{user_id}", headers=admin_headers, json={"email": "TAKEN@x.com"})
    assert r.status_code == 409
    assert error_code(r) == "DuplicateEmail"

    r = client.patch(
        f"{API}/users/{user_id}",
        headers=admin_headers,
        json={"email": "ana@x.com", "name": "Ana B", "role": "admin"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert (body["email"], body["name"], body["role"]) == ("ana@x.com", "Ana B", "admin")


def test_admin_change_role_and_get_user(client, admin_headers):
    user_id = make_user(email="a@x.com")

    r = client.patch(f"{API}/users/{user_id}/role", headers=admin_headers, json={"role": "admin"})
    assert r.status_code == 200
    assert client.get(f"{API}/users/{user_id}", headers=admin_headers).json()["role"] == "admin"


def test_unknown_user_is_not_found(client, admin_headers):
    r = client.get(f"{API}/users/00000000-0000-0000-0000-000000000000", headers=admin_headers)
    assert r.status_code == 404
    assert error_code(r) == "NotFound"


def test_toggle_active_blocks_existing_sessions(client, admin_headers):
    user_id = make_user(email="a@x.com")
    token = sign_in(client, "a@x.com")

    r = client.post(f"{API}/users/{user_id}/toggle-active", headers=admin_headers)
    assert r.json() == {"id": str(user_id), "is_active": False}
    assert client.get(f"{API}/auth/me", headers=bearer(token)).json() is None

    r = client.post(f"{API}/users/{user_id}/toggle-active", headers=admin_headers)
    assert r.json()["is_active"] is True
    assert client.get(f"{API}/auth/me", headers=bearer(token)).json() is not None


def test_admin_cannot_deactivate_or_delete_self(client, admin_headers):
    me = client.get(f"{API}/users/me", headers=admin_headers).json()

    r = client.post(f"{API}/users/{me['id']}/toggle-active", headers=admin_headers)
    assert r.status_code == 422
    assert error_code(r) == "ValidationError"

    r = client.delete(f"{API}/users/{me['id']}", headers=admin_headers)
    assert r.status_code == 422


def test_delete_user_removes_sessions_and_orders(client, admin_headers):
    user_id = make_user(email="a@x.com")
    token = sign_in(client, "a@x.com")
    make_order(user_id)

    r = client.delete(f"{API}/users/{user_id}", headers=admin_headers)
    assert r.status_code == 204

    assert client.get(f"{API}/auth/me", headers=bearer(token)).json() is None
    with Session(engine) as session:
        assert session.get(User, user_id) is None
        assert session.exec(select(UserSession).where(UserSession.user_id == user_id)).all() == []
        assert session.exec(select(Order).where(Order.user_id == user_id)).all() == []
