"""
Tests for authentication endpoints.
"""
from datetime import datetime, timedelta, timezone
from app.db.session import SessionLocal
from app.models.user import User


def _register(client, email="a@x.com", name="Alice", password="Passw0rd"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": password}
    )


def _stored_user(email):
    with SessionLocal() as db:
        user = db.query(User).filter(User.email == email).first()
        db.expunge(user)
        return user


def test_register(client):
    """Test user registration."""
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["name"] == "Alice"
    assert "password" not in body["user"]
    assert "hashedPassword" not in body["user"]
    assert body["token"]

    cookie = response.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Secure" not in cookie


def test_register_duplicate_email(client):
    _register(client)
    response = _register(client, email="A@X.com", name="Other")
    assert response.status_code == 400
    assert response.json() == {"message": "Email already exists", "field": "email"}


def test_register_rejects_weak_passwords(client):
    cases = [
        ("short1", "Password must be at least 8 characters"),
        ("12345678", "Password must contain at least one letter"),
        ("password", "Password must contain at least one number"),
    ]
    for password, message in cases:
        response = _register(client, password=password)
        assert response.status_code == 400
        assert response.json() == {"message": message, "field": "password"}


def test_register_rejects_short_name_and_bad_email(client):
    response = _register(client, name="A")
    assert response.status_code == 400
    assert response.json()["field"] == "name"

    response = _register(client, email="not-an-email")
    assert response.status_code == 400
    assert response.json()["field"] == "email"


def test_login(client):
    """Test user login."""
    _register(client)
    client.cookies.clear()

    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "Passw0rd"})
    assert response.status_code == 200
    assert response.json()["token"]
    assert "token" in response.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "a@x.com"


def test_login_invalid_credentials(client):
    """Wrong password and unknown email are indistinguishable."""
    _register(client)
    client.cookies.clear()

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "Wrong0ne"})
    unknown_email = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "Passw0rd"})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == {"message": "Invalid email or password"}
    assert unknown_email.json() == wrong_password.json()


def test_me_requires_authentication(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_bearer_header_wins_over_cookie(client, make_user):
    alice = make_user("alice@example.com")
    _register(client, email="bob@example.com", name="Bob")  # leaves Bob's cookie on the client

    response = client.get("/api/auth/me", headers=alice.headers)
    assert response.json()["email"] == "alice@example.com"


def test_logout_clears_cookie(client):
    _register(client)
    assert client.get("/api/auth/me").status_code == 200

    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert 'token=""' in response.headers["set-cookie"] or "Max-Age=0" in response.headers["set-cookie"]

    client.cookies.clear()
    assert client.get("/api/auth/me").status_code == 401


def test_reset_request_does_not_reveal_accounts(client):
    _register(client)

    known = client.post("/api/auth/reset-password-request", json={"email": "a@x.com"})
    unknown = client.post("/api/auth/reset-password-request", json={"email": "nobody@x.com"})

    assert known.status_code == 200
    assert unknown.status_code == 200
    assert known.json() == unknown.json()


def test_reset_password_flow(client):
    _register(client)
    client.cookies.clear()
    client.post("/api/auth/reset-password-request", json={"email": "a@x.com"})
    token = _stored_user("a@x.com").reset_token
    assert token

    response = client.post("/api/auth/reset-password", json={"token": token, "password": "N3wPassword"})
    assert response.status_code == 200

    old = client.post("/api/auth/login", json={"email": "a@x.com", "password": "Passw0rd"})
    new = client.post("/api/auth/login", json={"email": "a@x.com", "password": "N3wPassword"})
    assert old.status_code == 401
    assert new.status_code == 200

    # Tokens are single-use
    again = client.post("/api/auth/reset-password", json={"token": token, "password": "An0therOne"})
    assert again.status_code == 400
    assert again.json()["message"] == "Invalid or expired reset token"


def test_reset_password_with_expired_token(client):
    _register(client)
    client.post("/api/auth/reset-password-request", json={"email": "a@x.com"})

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "a@x.com").first()
        user.reset_token_expiry = datetime.now(timezone.utc) - timedelta(seconds=1)
        token = user.reset_token
        db.commit()

    response = client.post("/api/auth/reset-password", json={"token": token, "password": "N3wPassword"})
    assert response.status_code == 400


def test_update_profile(client, alice):
    response = client.patch(
        "/api/users/me",
        json={"name": "Alice Smith", "profileImageUrl": "https://img.example.com/a.png"},
        headers=alice.headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Alice Smith"
    assert response.json()["profileImageUrl"] == "https://img.example.com/a.png"
