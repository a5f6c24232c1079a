"""HTTP-level tests: cookie session, error rendering and the full shopping flow."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shopfront.api.deps import get_lock_service, get_notifier, get_payment_gateway
from shopfront.data.database import Base, get_db
from shopfront.data.models import UserModel
from shopfront.main import create_app


@pytest.fixture()
def session_factory(tmp_path, sqlite_engine):
    engine = sqlite_engine(f"sqlite:///{tmp_path / 'api.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture()
def client(session_factory, gateway, lock_service, notifier):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notifier] = lambda: notifier
    return TestClient(app)


def _signup(client, email="wes@example.com", password="hunter2"):
    response = client.post("/users/signup", json={"name": "Wes", "email": email, "password": password})
    assert response.status_code == 201
    return response.json()


def _create_item(client, title="Shirt", price=2000):
    response = client.post("/items/", json={"title": title, "price": price, "description": f"A {title}"})
    assert response.status_code == 201
    return response.json()


def _grant(session_factory, user_id, permissions):
    with session_factory() as db:
        user = db.get(UserModel, user_id)
        user.permissions = permissions
        db.commit()


class TestSession:
    def test_signup_sets_http_only_year_long_cookie(self, client):
        response = client.post("/users/signup", json={"name": "Wes", "email": "W@x.io", "password": "pw"})

        assert response.status_code == 201
        assert response.json()["permissions"] == ["USER"]
        assert "password" not in response.json()
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("token=")
        assert "httponly" in set_cookie
        assert "max-age=31536000" in set_cookie

    def test_me_follows_the_cookie(self, client):
        assert client.get("/users/me").json() is None

        user = _signup(client)
        assert client.get("/users/me").json()["id"] == user["id"]

        assert client.post("/users/signout").json() == {"message": "Goodbye!"}
        assert client.get("/users/me").json() is None

    def test_garbage_cookie_is_anonymous(self, client):
        client.cookies.set("token", "garbage")
        response = client.get("/cart/")
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"

    def test_signin_errors(self, client):
        _signup(client, email="ann@example.com", password="pw")
        client.post("/users/signout")

        assert client.post("/users/signin", json={"email": "nobody@example.com", "password": "pw"}).status_code == 404
        bad = client.post("/users/signin", json={"email": "ann@example.com", "password": "nope"})
        assert bad.status_code == 401
        assert bad.json()["error"] == "InvalidCredential"
        assert client.post("/users/signin", json={"email": "ann@example.com", "password": "pw"}).status_code == 200

    def test_request_reset_is_constant(self, client, notifier):
        _signup(client, email="ann@example.com")

        known = client.post("/users/request-reset", json={"email": "ann@example.com"})
        unknown = client.post("/users/request-reset", json={"email": "ghost@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json() == {"message": "Thanks!"}
        assert [email for email, _ in notifier.sent] == ["ann@example.com"]

    def test_reset_password_flow(self, client, notifier):
        _signup(client, email="ann@example.com", password="old")
        client.post("/users/signout")
        client.post("/users/request-reset", json={"email": "ann@example.com"})
        _, token = notifier.sent[0]

        mismatch = client.post(
            "/users/reset-password",
            json={"reset_token": token, "password": "a", "confirm_password": "b"},
        )
        assert mismatch.status_code == 400
        assert mismatch.json()["error"] == "Mismatch"

        response = client.post(
            "/users/reset-password",
            json={"reset_token": token, "password": "new", "confirm_password": "new"},
        )
        assert response.status_code == 200
        assert client.get("/users/me").json()["email"] == "ann@example.com"

        reused = client.post(
            "/users/reset-password",
            json={"reset_token": token, "password": "x", "confirm_password": "x"},
        )
        assert reused.json()["error"] == "InvalidOrExpiredToken"


class TestPermissions:
    def test_plain_user_cannot_update_permissions(self, client):
        target = _signup(client, email="target@example.com")
        client.post("/users/signout")
        _signup(client, email="plain@example.com")

        response = client.put(f"/users/{target['id']}/permissions", json={"permissions": ["ADMIN"]})

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized"

    def test_admin_replaces_permissions(self, client, session_factory):
        target = _signup(client, email="target@example.com")
        client.post("/users/signout")
        admin = _signup(client, email="admin@example.com")
        _grant(session_factory, admin["id"], ["USER", "ADMIN"])

        response = client.put(
            f"/users/{target['id']}/permissions", json={"permissions": ["ITEMCREATE", "ITEMDELETE"]}
        )

        assert response.status_code == 200
        assert response.json()["permissions"] == ["ITEMCREATE", "ITEMDELETE"]
        assert len(client.get("/users/").json()) == 2

    def test_unknown_permission_is_a_validation_error(self, client):
        user = _signup(client)
        response = client.put(f"/users/{user['id']}/permissions", json={"permissions": ["ROOT"]})
        assert response.status_code == 422


class TestShoppingFlow:
    def test_add_twice_then_checkout(self, client, gateway):
        _signup(client)
        shirt = _create_item(client, "Shirt", 2000)

        client.post(f"/cart/items/{shirt['id']}")
        line = client.post(f"/cart/items/{shirt['id']}").json()
        assert line["quantity"] == 2

        cart = client.get("/cart/").json()
        assert len(cart["items"]) == 1
        assert cart["total"] == 4000

        response = client.post("/orders/", json={"token": "tok_visa"})
        assert response.status_code == 201
        order = response.json()
        assert order["total"] == 4000
        assert [(i["title"], i["price"], i["quantity"]) for i in order["items"]] == [("Shirt", 2000, 2)]

        assert client.get("/cart/").json()["items"] == []
        assert client.get(f"/orders/{order['id']}").json()["charge"] == order["charge"]
        assert [o["id"] for o in client.get("/orders/").json()] == [order["id"]]

    def test_empty_cart_checkout(self, client, gateway):
        _signup(client)

        response = client.post("/orders/", json={"token": "tok_visa"})

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidOperation"
        assert gateway.calls == []

    def test_declined_payment(self, client, gateway):
        _signup(client)
        shirt = _create_item(client)
        client.post(f"/cart/items/{shirt['id']}")
        gateway.configure(mode="decline")

        response = client.post("/orders/", json={"token": "tok_chargeDeclined"})

        assert response.status_code == 402
        assert response.json()["error"] == "GatewayFailure"
        assert len(client.get("/cart/").json()["items"]) == 1

    def test_unknown_payment_outcome_is_not_retriable(self, client, gateway):
        _signup(client)
        shirt = _create_item(client)
        client.post(f"/cart/items/{shirt['id']}")
        gateway.configure(mode="timeout")

        response = client.post("/orders/", json={"token": "tok_visa"})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "PartialCommit"
        assert body["retriable"] is False
        assert body["charge_id"] is None

    def test_cannot_remove_someone_elses_line(self, client):
        _signup(client, email="owner@example.com")
        shirt = _create_item(client)
        line = client.post(f"/cart/items/{shirt['id']}").json()
        client.post("/users/signout")
        _signup(client, email="thief@example.com")

        response = client.delete(f"/cart/lines/{line['id']}")

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_remove_own_line(self, client):
        _signup(client)
        shirt = _create_item(client)
        line = client.post(f"/cart/items/{shirt['id']}").json()

        response = client.delete(f"/cart/lines/{line['id']}")

        assert response.json() == {"id": line["id"], "item_id": shirt["id"]}
        assert client.delete(f"/cart/lines/{line['id']}").status_code == 404


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
