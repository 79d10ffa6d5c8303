"""
hotel_desk.auth.jwt

PyJWT wrapper for session tokens.

Responsibilities:
- Sign identity claims together with issuer, issue time and absolute expiry.
- Reject tokens with a bad signature, a foreign issuer, a missing claim or the
  wrong token type.

`exp` must be present but is not compared to wall-clock time here; the session
store checks it against its own clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import jwt
from jwt import InvalidTokenError

TOKEN_TYPE = "session"

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "sub", "typ"]


@dataclass(frozen=True, slots=True)
class TokenConfig:
    alg: str
    issuer: str
    secret: str


class TokenValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: TokenConfig,
    claims: dict[str, Any],
    issued_at: datetime,
    expires_at: datetime,
) -> str:
    if expires_at <= issued_at:
        raise ValueError("expires_at must be after issued_at")
    payload = dict(claims)
    payload.update(
        iss=cfg.issuer,
        typ=TOKEN_TYPE,
        iat=int(issued_at.timestamp()),
        exp=int(expires_at.timestamp()),
    )
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: TokenConfig, token: str) -> dict[str, Any]:
    try:
        claims = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
        )
    except InvalidTokenError as e:
        raise TokenValidationError(str(e)) from e
    if claims.get("typ") != TOKEN_TYPE:
        raise TokenValidationError(f"unexpected token type {claims.get('typ')!r}")
    return claims
