"""
Tests for request identity: JWT helpers and bearer parsing.
"""

from __future__ import annotations

import uuid
from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException

from app.core.auth import create_jwt, decode_jwt, parse_bearer, settings
from app.core.config import DEFAULT_SECRET_KEY, Settings


class TestJWT:
    def test_round_trip_claims(self):
        user_id = uuid.uuid4()
        token, jti = create_jwt(user_id, email="a@example.com")
        payload = decode_jwt(token)
        assert payload["sub"] == str(user_id)
        assert payload["email"] == "a@example.com"
        assert payload["jti"] == jti

    def test_expired_token(self):
        token, _ = create_jwt(uuid.uuid4(), expires_delta=timedelta(seconds=-1))
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_jwt(token)

    def test_tampered_token(self):
        token, _ = create_jwt(uuid.uuid4())
        with pytest.raises(jwt.PyJWTError):
            decode_jwt(token[:-2] + "xx")


class TestParseBearer:
    def test_no_header_is_anonymous(self):
        assert parse_bearer(None) is None
        assert parse_bearer("") is None

    def test_bare_uuid_accepted_in_debug(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", True)
        user_id = uuid.uuid4()
        assert parse_bearer(f"Bearer {user_id}") == (user_id, None)

    def test_bare_uuid_rejected_outside_debug(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        with pytest.raises(HTTPException) as exc:
            parse_bearer(f"Bearer {uuid.uuid4()}")
        assert exc.value.status_code == 401

    def test_jwt(self):
        user_id = uuid.uuid4()
        token, _ = create_jwt(user_id, email="a@example.com")
        assert parse_bearer(f"Bearer {token}") == (user_id, "a@example.com")

    def test_wrong_scheme(self):
        with pytest.raises(HTTPException) as exc:
            parse_bearer("Basic dXNlcjpwYXNz")
        assert exc.value.status_code == 401

    def test_garbage_token(self):
        with pytest.raises(HTTPException) as exc:
            parse_bearer("Bearer not-a-token")
        assert exc.value.status_code == 401

    def test_jwt_without_subject(self):
        token = jwt.encode({"email": "a@example.com"}, settings.secret_key, algorithm=settings.jwt_algorithm)
        with pytest.raises(HTTPException):
            parse_bearer(f"Bearer {token}")


@pytest.mark.asyncio
async def test_invalid_token_rejected_over_http(client):
    response = await client.get("/api/v1/topics", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_jwt_email_lands_on_profile(client, store):
    user_id = uuid.uuid4()
    token, _ = create_jwt(user_id, email="jwt@example.com")
    response = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "jwt@example.com"
    assert (await store.get_profile(user_id)).email == "jwt@example.com"


class TestIdentityHardening:
    @pytest.mark.asyncio
    async def test_public_user_id_does_not_grant_identity(self, client, seed, alice, root, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        public = await seed.topic(is_public=True, created_by=root.user_id)
        private = await seed.topic(created_by=alice.user_id)

        response = await client.get(f"/api/v1/topics/{public.id}")
        assert response.json()["created_by"] == str(root.user_id)

        response = await client.delete(
            f"/api/v1/topics/{private.id}",
            headers={"Authorization": f"Bearer {root.user_id}"},
        )
        assert response.status_code == 401
        assert await seed.store.get_topic(private.id) is not None

    def test_default_secret_refused_outside_debug(self, monkeypatch):
        import app.main as main

        monkeypatch.setattr(main, "settings", Settings(secret_key=DEFAULT_SECRET_KEY, debug=False))
        with pytest.raises(RuntimeError):
            main.create_app()

    def test_default_secret_allowed_in_debug(self, monkeypatch):
        import app.main as main

        monkeypatch.setattr(main, "settings", Settings(secret_key=DEFAULT_SECRET_KEY, debug=True))
        assert main.create_app().title == "Timeline"
