from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt
from passlib.context import CryptContext

from staffdesk.core.errors import InvalidTokenError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)


def burn_password_check() -> None:
    """Spend the same work as a real verification when no user matched."""
    pwd_context.dummy_verify()


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Issues and validates HS256 session tokens carrying identity and expiry."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
        clock: Clock = utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        issued_at = self._clock()
        claims = {
            "sub": str(user_id),
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def validate(self, token: str | None) -> TokenClaims:
        if not token:
            raise InvalidTokenError("Access token required")
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (JWTError, KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Invalid token") from exc

        if self._clock() >= claims.expires_at:
            raise InvalidTokenError("Token expired")
        return claims


def read_unverified_expiry(token: str) -> datetime | None:
    """Expiry of a token without checking its signature, or None if unreadable."""
    try:
        payload = jwt.get_unverified_claims(token)
        return datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
    except (JWTError, KeyError, TypeError, ValueError):
        return None
