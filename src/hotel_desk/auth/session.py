"""
hotel_desk.auth.session

Session store: at most one authenticated identity plus an absolute expiry.

Responsibilities:
- Log in through the authenticator and stamp `expires_at = now + ttl`.
- Lazily expire: `check_session()` clears an identity whose expiry has passed.
- Persist to / restore from a signed client-held token; a restored session is
  only trusted after `check_session()`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from hotel_desk.auth.authenticator import (
    AccessCodeAuthenticator,
    InvalidCodeError,
    LookupFailedError,
)
from hotel_desk.auth.jwt import TokenConfig, TokenValidationError, decode_and_validate, issue_token
from hotel_desk.auth.models import Identity
from hotel_desk.observability.logging import get_logger

log = get_logger(__name__)

Clock = Callable[[], datetime]

DEFAULT_TTL = timedelta(hours=1)


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SessionCodec:
    def __init__(self, cfg: TokenConfig) -> None:
        self._cfg = cfg

    def encode(self, identity: Identity, *, issued_at: datetime, expires_at: datetime) -> str:
        return issue_token(
            cfg=self._cfg,
            claims=identity.to_claims(),
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def decode(self, token: str) -> tuple[Identity, datetime] | None:
        try:
            claims = decode_and_validate(cfg=self._cfg, token=token)
            identity = Identity.from_claims(claims)
            expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        except (TokenValidationError, KeyError, TypeError, ValueError) as e:
            log.info("session_token_rejected", reason=str(e))
            return None
        return identity, expires_at


class SessionStore:
    """
    Explicit session context. One instance per client interaction; created with
    `restore()` from the client's token (if any) and torn down with `close()`.
    """

    def __init__(
        self,
        *,
        authenticator: AccessCodeAuthenticator,
        codec: SessionCodec,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._authenticator = authenticator
        self._codec = codec
        self._ttl = ttl
        self._clock = clock

        self._identity: Identity | None = None
        self._expires_at: datetime | None = None
        self._issued_at: datetime | None = None
        self.error: str | None = None

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    async def login(self, code: str) -> bool:
        try:
            identity = await self._authenticator.authenticate(code)
        except InvalidCodeError:
            self._clear()
            self.error = "Invalid code"
            log.info("login_failed", reason="invalid_code")
            return False
        except LookupFailedError as e:
            self._clear()
            self.error = "Login failed"
            log.warning("login_failed", reason="lookup_failed", error=str(e))
            return False

        now = self._clock()
        self._identity = identity
        self._issued_at = now
        self._expires_at = now + self._ttl
        self.error = None
        log.info("login_succeeded", role=identity.role.value, source=identity.source.value)
        return True

    def logout(self) -> None:
        self._clear()
        self.error = None

    def check_session(self) -> bool:
        if self._identity is None or self._expires_at is None:
            return False
        if self._clock() >= self._expires_at:
            log.info("session_expired", role=self._identity.role.value)
            self._clear()
            return False
        return True

    def dump(self) -> str | None:
        # Only a currently valid session is written back to the client.
        current = self._current()
        if current is None:
            return None
        identity, expires_at = current
        return self._codec.encode(
            identity,
            issued_at=self._issued_at or self._clock(),
            expires_at=expires_at,
        )

    def restore(self, token: str) -> None:
        decoded = self._codec.decode(token)
        if decoded is None:
            self._clear()
            return
        self._identity, self._expires_at = decoded
        self._issued_at = None

    def remaining(self) -> timedelta:
        current = self._current()
        if current is None:
            return timedelta(0)
        return current[1] - self._clock()

    def close(self) -> None:
        self._clear()

    def _current(self) -> tuple[Identity, datetime] | None:
        if not self.check_session():
            return None
        return self._identity, self._expires_at  # type: ignore[return-value]

    def _clear(self) -> None:
        self._identity = None
        self._expires_at = None
        self._issued_at = None


# --- Module Notes -----------------------------------------------------------
# Tokens carry whole-second expiry, so a restored session may expire up to one
# second earlier than the in-memory one it was dumped from.
