from datetime import timedelta

from fintrack.services.security import create_access_token


def test_register_returns_token_and_user_summary(client):
    r = client.post("/api/v1/auth/register", json={
        "username": "carol", "email": "carol@finmail.com", "password": "secret123",
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["username"] == "carol"
    assert body["user"]["email"] == "carol@finmail.com"
    assert "password" not in body["user"]
    assert "hashed_password" not in body["user"]


def test_register_rejects_duplicate_email_or_username(client, auth):
    r = client.post("/api/v1/auth/register", json={
        "username": "someone", "email": "alice@finmail.com", "password": "secret123",
    })
    assert r.status_code == 409
    assert r.json() == {"success": False, "message": "User already exists with this email or username"}

    r = client.post("/api/v1/auth/register", json={
        "username": "alice", "email": "fresh@finmail.com", "password": "secret123",
    })
    assert r.status_code == 409


def test_register_validation_reports_first_message(client):
    r = client.post("/api/v1/auth/register", json={
        "username": "ab", "email": "ab@finmail.com", "password": "secret123",
    })
    assert r.status_code == 400
    assert r.json()["message"] == "Username must be at least 3 characters long"

    r = client.post("/api/v1/auth/register", json={
        "username": "abcd", "email": "abcd@finmail.com", "password": "123",
    })
    assert r.status_code == 400
    assert r.json()["message"] == "Password must be at least 6 characters long"

    r = client.post("/api/v1/auth/register", json={
        "username": "abcd", "email": "not-an-email", "password": "secret123",
    })
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Please provide a valid email"}


def test_login_success_and_generic_failure(client, auth):
    r = client.post("/api/v1/auth/login", json={"email": "alice@finmail.com", "password": "secret123"})
    assert r.status_code == 200, r.text
    assert r.json()["user"]["id"] == auth["user"]["id"]
    assert r.json()["token"]

    wrong_password = client.post("/api/v1/auth/login", json={"email": "alice@finmail.com", "password": "nope-nope"})
    unknown_email = client.post("/api/v1/auth/login", json={"email": "ghost@finmail.com", "password": "secret123"})
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    # same message whichever field was wrong
    assert wrong_password.json() == unknown_email.json() == {"success": False, "message": "Invalid credentials"}


def test_verify_with_valid_token(client, auth):
    r = client.get("/api/v1/auth/verify", headers=auth["headers"])
    assert r.status_code == 200
    assert r.json()["user"] == auth["user"]


def test_private_routes_reject_missing_or_bad_tokens(client, auth):
    assert client.get("/api/v1/auth/verify").status_code == 401
    assert client.get("/api/v1/dashboard/summary").status_code == 401

    bad = {"Authorization": "Bearer not-a-jwt"}
    r = client.get("/api/v1/income", headers=bad)
    assert r.status_code == 401
    assert r.json()["success"] is False

    signed_part = auth["headers"]["Authorization"].rsplit(".", 1)[0]
    tampered = signed_part + "." + "A" * 43
    assert client.get("/api/v1/auth/verify", headers={"Authorization": tampered}).status_code == 401

    forged = create_access_token(auth["user"]["id"]).rsplit(".", 1)[0] + "." + "B" * 43
    assert client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_expired_token_is_rejected(client, auth):
    token = create_access_token(auth["user"]["id"], expires_delta=timedelta(minutes=-5))
    r = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_for_missing_user_is_rejected(client):
    token = create_access_token(987654)
    r = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "User not found"
