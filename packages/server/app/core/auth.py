"""
Request identity for the Timeline API.

Identity issuance (login, magic links, password auth) lives outside this
server. Requests carry either:
- a signed JWT in ``Authorization: Bearer <jwt>`` (``sub`` = user id), or
- a bare user UUID as the bearer token, accepted only when ``debug`` is on
  (local development compat).

No header resolves to the anonymous actor. Unknown users get a profile on
first authentication.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader

from app.core.config import get_settings
from app.policy.actor import ANONYMOUS, Actor
from app.policy.store import ContentStore
from app.services import users as user_service
from app.services.store import get_store

log = structlog.get_logger()
settings = get_settings()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def create_jwt(
    user_id: uuid.UUID,
    *,
    email: Optional[str] = None,
    expires_delta: timedelta | None = None,
) -> tuple[str, str]:
    """Create a signed JWT. Returns (token, jti)."""
    jti = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": exp,
        "jti": jti,
    }
    if email:
        payload["email"] = email
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token, jti


def decode_jwt(token: str) -> dict:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def parse_bearer(authorization: Optional[str]) -> Optional[tuple[uuid.UUID, Optional[str]]]:
    """Return (user_id, email) from a bearer header, None if no header.

    Raises HTTPException(401) for a header that is present but invalid.
    """
    if not authorization:
        return None
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unsupported authorization scheme")
    token = authorization[7:].strip()

    # Bare UUID (development compat)
    try:
        user_id = uuid.UUID(token)
    except ValueError:
        pass
    else:
        if not settings.debug:
            raise HTTPException(status_code=401, detail="Signed session token required")
        return user_id, None

    try:
        payload = decode_jwt(token)
        return uuid.UUID(payload["sub"]), payload.get("email")
    except (jwt.PyJWTError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired session")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

async def get_actor(
    authorization: Optional[str] = Depends(api_key_header),
    store: ContentStore = Depends(get_store),
) -> Actor:
    """Resolve the request's actor. Anonymous requests are allowed."""
    subject = parse_bearer(authorization)
    if subject is None:
        return ANONYMOUS

    user_id, email = subject
    profile = await user_service.ensure_profile(
        store,
        user_id,
        email=email,
        bootstrap_emails=settings.bootstrap_super_admin_emails,
    )
    structlog.contextvars.bind_contextvars(user_id=str(profile.id))
    return Actor.from_profile(profile)


async def require_actor(actor: Actor = Depends(get_actor)) -> Actor:
    """Reject anonymous requests."""
    if not actor.is_authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    return actor
