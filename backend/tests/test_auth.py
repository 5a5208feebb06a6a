import pytest
from jose import jwt

from clinic_admin.auth import InvalidTokenError, TokenVerifier, create_token, extract_token
from clinic_admin.config import get_settings
from factories import TEST_SECRET, add_admin, bearer

GUARDED_ROUTES = [
    ("get", "/api/admin/profile"),
    ("get", "/api/admin/total-doctors"),
    ("get", "/api/admin/total-patients"),
    ("get", "/api/admin/doctor-overview"),
    ("get", "/api/admin/patient-overview"),
    ("get", "/api/admin/appointment/completed-cancelled"),
    ("get", "/api/admin/appointments/upcoming"),
    ("post", "/api/admin/add-doctor"),
    ("post", "/api/admin/add-admin"),
    ("put", "/api/admin/profile"),
]


class TestTokenVerifier:
    def test_round_trip_claims(self):
        verifier = TokenVerifier("s3cret")
        principal = verifier.verify(create_token("A1", "admin", "s3cret"))
        assert principal.id == "A1"
        assert principal.role == "admin"
        assert principal.is_admin

    def test_wrong_secret_rejected(self):
        verifier = TokenVerifier("s3cret")
        with pytest.raises(InvalidTokenError):
            verifier.verify(create_token("A1", "admin", "other"))

    def test_expired_token_rejected(self):
        verifier = TokenVerifier("s3cret")
        with pytest.raises(InvalidTokenError):
            verifier.verify(create_token("A1", "admin", "s3cret", expires_in=-60))

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            TokenVerifier("s3cret").verify("not.a.jwt")

    def test_non_admin_role(self):
        principal = TokenVerifier("s3cret").verify(create_token("D1", "doctor", "s3cret"))
        assert not principal.is_admin


def test_token_defaults_follow_settings(monkeypatch):
    monkeypatch.setattr(get_settings(), "jwt_algorithm", "HS512")

    token = create_token("A1", "admin", "s3cret")
    assert jwt.get_unverified_header(token)["alg"] == "HS512"
    assert TokenVerifier("s3cret").verify(token).id == "A1"


def test_extract_token():
    assert extract_token("Bearer abc") == "abc"
    assert extract_token("Bearer ") == ""
    assert extract_token("") == ""
    assert extract_token("abc") == "abc"


@pytest.mark.parametrize("method,path", GUARDED_ROUTES)
async def test_missing_token_is_401(client, method, path):
    resp = await getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.json() == {"error": "No token provided"}


@pytest.mark.parametrize("method,path", GUARDED_ROUTES)
async def test_invalid_token_is_401(client, method, path):
    resp = await getattr(client, method)(path, headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}


async def test_empty_bearer_counts_as_missing(client):
    resp = await client.get("/api/admin/total-doctors", headers={"Authorization": "Bearer "})
    assert resp.status_code == 401
    assert resp.json() == {"error": "No token provided"}


async def test_expired_token_is_401(client):
    resp = await client.get("/api/admin/total-doctors", headers=bearer("admin-1", expires_in=-60))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}


async def test_token_signed_with_other_secret_is_401(client):
    resp = await client.get("/api/admin/total-doctors", headers=bearer("admin-1", secret="not-" + TEST_SECRET))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}


async def test_non_admin_token_reaches_read_routes(client, doctor_headers):
    resp = await client.get("/api/admin/total-doctors", headers=doctor_headers)
    assert resp.status_code == 200


async def test_login_issues_usable_token(client, session_factory):
    admin = await add_admin(session_factory, email="boss@clinic.test", password="hunter2")

    resp = await client.post("/api/auth/token", json={"email": "boss@clinic.test", "password": "hunter2"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["id"] == admin.id
    assert body["role"] == "admin"

    profile = await client.get(
        "/api/admin/profile", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert profile.status_code == 200
    assert profile.json()["email"] == "boss@clinic.test"


async def test_login_wrong_password(client, session_factory):
    await add_admin(session_factory, email="boss@clinic.test", password="hunter2")
    resp = await client.post("/api/auth/token", json={"email": "boss@clinic.test", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


async def test_login_unknown_email(client):
    resp = await client.post("/api/auth/token", json={"email": "ghost@clinic.test", "password": "x"})
    assert resp.status_code == 401


async def test_login_rejects_unknown_fields(client, session_factory):
    await add_admin(session_factory, email="boss@clinic.test", password="hunter2")
    resp = await client.post(
        "/api/auth/token",
        json={"email": "boss@clinic.test", "password": "hunter2", "role": "admin"},
    )
    assert resp.status_code == 400
    assert "role" in resp.json()["error"]
