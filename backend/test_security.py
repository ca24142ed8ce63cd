"""Tokens, password hashing, rate limiting and response headers."""
from datetime import timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from pharmacy.core.rate_limiter import RateLimiter, RateLimitMiddleware
from pharmacy.core.security import create_access_token, decode_access_token, get_password_hash, verify_password


def test_password_hash_round_trip():
    hashed = get_password_hash("Secret123")

    assert hashed != "Secret123"
    assert hashed.startswith("$2")
    assert verify_password("Secret123", hashed)
    assert not verify_password("secret123", hashed)


def test_verify_password_rejects_malformed_hashes():
    assert not verify_password("Secret123", None)
    assert not verify_password("Secret123", "plain-text-from-legacy-table")
    assert not verify_password("", get_password_hash("x" * 8))


def test_token_round_trip():
    token = create_access_token("42")

    assert decode_access_token(token) == "42"


def test_expired_and_forged_tokens():
    expired = create_access_token("42", expires_delta=timedelta(seconds=-5))
    forged = jwt.encode({"sub": "42"}, "some-other-key", algorithm="HS256")

    assert decode_access_token(expired) is None
    assert decode_access_token(forged) is None


def test_limiter_window():
    limiter = RateLimiter(requests=2, window=60)

    assert limiter.is_allowed("ip:1", now=1000.0) == (True, 1)
    assert limiter.is_allowed("ip:1", now=1001.0) == (True, 0)
    assert limiter.is_allowed("ip:1", now=1002.0) == (False, 0)
    assert limiter.is_allowed("ip:2", now=1002.0)[0] is True
    assert limiter.is_allowed("ip:1", now=1061.0)[0] is True


def test_middleware_only_limits_auth_paths():
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limiter=RateLimiter(requests=2, window=60), path_prefix="/auth")

    @app.post("/auth/login")
    def login():
        return {"ok": True}

    @app.get("/medicines")
    def medicines():
        return []

    client = TestClient(app)
    statuses = [client.post("/auth/login").status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
    blocked = client.post("/auth/login")
    assert blocked.headers["retry-after"] == "60"
    assert "Rate limit exceeded" in blocked.json()["message"]
    assert all(client.get("/medicines").status_code == 200 for _ in range(5))


def test_security_headers(client):
    resp = client.get("/health")

    assert resp.json() == {"status": "ok"}
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "DENY"


def test_untrusted_host_rejected(client):
    resp = client.get("/health", headers={"host": "evil.example.org"})

    assert resp.status_code == 400


def test_validation_errors_use_message_shape(client):
    resp = client.post("/categories", json={})

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation error"
    assert body["errors"][0]["field"] == "name"
