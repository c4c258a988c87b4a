# -*- coding: utf-8 -*-
"""Auth — password hashes, signed session tokens and the current-user dependency.

Passwords are stored as ``pbkdf2_<alg>$<iterations>$<salt>$<digest>``.
Session tokens are compact HS256 JWTs carrying :class:`TokenClaims`; they are
read from the ``Authorization: Bearer`` header first, then from the
``glucowise_token`` cookie.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError

from ..config import settings
from .models import TokenClaims
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "glucowise_token"

HASH_ALGORITHM = "sha256"
HASH_ITERATIONS = 200_000
SALT_BYTES = 16

_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _derive(password: str, salt: bytes, iterations: int, algorithm: str) -> bytes:
    return hashlib.pbkdf2_hmac(algorithm, password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    salt = os.urandom(SALT_BYTES)
    digest = _derive(password, salt, HASH_ITERATIONS, HASH_ALGORITHM)
    return "$".join((f"pbkdf2_{HASH_ALGORITHM}", str(HASH_ITERATIONS), _b64(salt), _b64(digest)))


def _parse_hash(stored: str) -> Optional[tuple]:
    parts = stored.split("$")
    if len(parts) != 4 or not parts[0].startswith("pbkdf2_"):
        return None
    scheme, iterations, salt, digest = parts
    try:
        return scheme[len("pbkdf2_"):], int(iterations), _unb64(salt), _unb64(digest)
    except ValueError:
        return None


def verify_password(password: str, stored: str) -> bool:
    parsed = _parse_hash(stored or "")
    if parsed is None:
        return False
    algorithm, iterations, salt, digest = parsed
    try:
        candidate = _derive(password, salt, iterations, algorithm)
    except ValueError:
        # unknown hash algorithm
        return False
    return hmac.compare_digest(candidate, digest)


def needs_rehash(stored: str) -> bool:
    """True when a stored hash was made with other parameters than the current ones."""
    parsed = _parse_hash(stored or "")
    if parsed is None:
        return True
    algorithm, iterations, salt, _ = parsed
    return algorithm != HASH_ALGORITHM or iterations != HASH_ITERATIONS or len(salt) != SALT_BYTES


def _signature(signing_input: bytes) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def _segment(obj: Dict[str, Any]) -> str:
    return _b64(json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def issue_token(user: Dict[str, Any]) -> str:
    issued = int(time.time())
    claims = TokenClaims(
        sub=user["id"],
        email=user["email"],
        iat=issued,
        exp=issued + int(settings.token_ttl_days) * 86400,
    )
    head_and_body = f"{_segment(_JWT_HEADER)}.{_segment(claims.model_dump())}"
    return f"{head_and_body}.{_b64(_signature(head_and_body.encode('ascii')))}"


def read_token(token: str) -> TokenClaims:
    """Check a token's signature and expiry; raise 401 when either fails."""
    head_and_body, _, sig = token.rpartition(".")
    if head_and_body.count(".") != 1:
        raise HTTPException(status_code=401, detail="Invalid token")
    try:
        valid = hmac.compare_digest(_signature(head_and_body.encode("ascii")), _unb64(sig))
        if not valid:
            raise HTTPException(status_code=401, detail="Invalid token")
        body = json.loads(_unb64(head_and_body.split(".")[1]).decode("utf-8"))
        claims = TokenClaims.model_validate(body)
    except (ValueError, UnicodeError, ValidationError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if claims.exp < int(time.time()):
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


def token_from_request(request: Request) -> Optional[str]:
    scheme, _, credentials = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = get_user_by_id(read_token(token).sub)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
