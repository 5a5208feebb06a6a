"""
Auth module: JWT signing/verification and the get_current_user FastAPI dependency.

Every admin route requires a bearer token. A missing token and a token that fails
verification are both rejected with 401. Admin-only routes add require_admin, which
answers 403 before the request body is looked at.
"""

import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from jose import jwt, JWTError
from fastapi import Depends, HTTPException, Request
from clinic_admin.config import get_settings


class InvalidTokenError(Exception):
    pass


@dataclass
class Principal:
    """Decoded claims attached to each authenticated request."""
    id: str
    role: str                     # "admin" | "doctor" | "patient"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_token(
    subject_id: str,
    role: str,
    secret: str,
    algorithm: Optional[str] = None,
    expires_in: Optional[int] = None,
) -> str:
    """Create a signed JWT carrying the caller's id and role."""
    settings = get_settings()
    if algorithm is None:
        algorithm = settings.jwt_algorithm
    if expires_in is None:
        expires_in = settings.token_expire_seconds
    payload = {
        "id": subject_id,
        "role": role,
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


class TokenVerifier:
    """Checks signature and expiry against the secret it was built with."""

    def __init__(self, secret: str, algorithm: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm or get_settings().jwt_algorithm

    def verify(self, token: str) -> Principal:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
        if payload.get("id") is None:
            raise InvalidTokenError("token has no id claim")
        return Principal(id=str(payload["id"]), role=payload.get("role") or "")


@lru_cache()
def get_token_verifier() -> TokenVerifier:
    settings = get_settings()
    return TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)


def extract_token(auth_header: str) -> str:
    """Strip the "Bearer " scheme; anything else is passed through as the raw token."""
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip()
    return auth_header.strip()


async def get_current_user(
    request: Request,
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Principal:
    """
    FastAPI dependency. Extracts the JWT from the Authorization header and
    returns the decoded principal, or raises 401.
    """
    token = extract_token(request.headers.get("Authorization", ""))
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")
    try:
        return verifier.verify(token)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")


def require_admin(detail: str = "Admin access required"):
    """Dependency factory: the authenticated principal, or 403 with `detail`."""

    async def dependency(current_user: Principal = Depends(get_current_user)) -> Principal:
        if not current_user.is_admin:
            raise HTTPException(status_code=403, detail=detail)
        return current_user

    return dependency
