from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from staffdesk.core.errors import InvalidTokenError
from staffdesk.core.security import TokenIssuer, hash_password, read_unverified_expiry, verify_password

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_issued_token_validates_to_subject_and_day_long_expiry():
    issuer = TokenIssuer("secret", clock=FakeClock(NOW))

    claims = issuer.validate(issuer.issue(7, "maria"))

    assert claims.user_id == 7
    assert claims.username == "maria"
    assert claims.expires_at - claims.issued_at == timedelta(hours=24)


def test_token_is_invalid_once_expiry_is_reached():
    clock = FakeClock(NOW)
    issuer = TokenIssuer("secret", clock=clock)
    token = issuer.issue(1, "admin")

    clock.now = NOW + timedelta(hours=23, minutes=59)
    assert issuer.validate(token).username == "admin"

    clock.now = NOW + timedelta(hours=24)
    with pytest.raises(InvalidTokenError):
        issuer.validate(token)


def test_token_signed_with_other_key_is_rejected():
    token = TokenIssuer("other", clock=FakeClock(NOW)).issue(1, "admin")

    with pytest.raises(InvalidTokenError):
        TokenIssuer("secret", clock=FakeClock(NOW)).validate(token)


def test_tampered_claims_are_rejected():
    issuer = TokenIssuer("secret", clock=FakeClock(NOW))
    header, _, signature = issuer.issue(2, "maria").split(".")
    forged_payload = jwt.encode({"sub": "1", "username": "admin", "iat": 0, "exp": 2**31}, "x").split(".")[1]

    with pytest.raises(InvalidTokenError):
        issuer.validate(f"{header}.{forged_payload}.{signature}")


@pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c"])
def test_missing_or_malformed_token_is_rejected(token):
    with pytest.raises(InvalidTokenError):
        TokenIssuer("secret").validate(token)


def test_token_without_username_claim_is_rejected():
    token = jwt.encode({"sub": "1", "iat": 0, "exp": 2**31}, "secret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        TokenIssuer("secret").validate(token)


def test_unverified_expiry_reads_exp_claim():
    token = TokenIssuer("secret", clock=FakeClock(NOW)).issue(1, "admin")

    assert read_unverified_expiry(token) == NOW + timedelta(hours=24)
    assert read_unverified_expiry("garbage") is None


def test_password_hash_round_trip():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
