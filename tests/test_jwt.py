"""Token issuer tests.

Learn: Expiry is tested against a simulated clock. iat is whole seconds
but exp keeps the fraction of the issuance instant, so a token issued
mid-second still lives its full expiry.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from accountd.auth.jwt import TokenError, TokenIssuer

SECRET = "unit-test-secret-0123456789abcdef0123"
START = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock():
    return FakeClock(START)


@pytest.fixture()
def issuer(clock):
    return TokenIssuer(secret=SECRET, expires_in=600, clock=clock)


def test_round_trip(issuer):
    token = issuer.issue("acc-123")
    assert issuer.verify(token) == "acc-123"


def test_subject_is_stringified(issuer):
    account_id = uuid.uuid4()
    assert issuer.verify(issuer.issue(account_id)) == str(account_id)


def test_payload_carries_only_sub_iat_exp(issuer):
    token = issuer.issue("acc-123")
    payload = jwt.decode(token, options={"verify_signature": False})
    assert set(payload) == {"sub", "iat", "exp"}
    assert payload["exp"] - payload["iat"] == 600


def test_valid_just_before_expiry(issuer, clock):
    token = issuer.issue("acc-123")
    clock.advance(600 - 0.001)
    assert issuer.verify(token) == "acc-123"


def test_invalid_just_after_expiry(issuer, clock):
    token = issuer.issue("acc-123")
    clock.advance(600 + 0.001)
    with pytest.raises(TokenError):
        issuer.verify(token)


def test_issued_mid_second_lives_full_expiry(clock, issuer):
    clock.now = START + timedelta(milliseconds=900)
    token = issuer.issue("acc-123")

    clock.advance(600 - 0.5)
    assert issuer.verify(token) == "acc-123"

    clock.advance(0.5 + 0.001)
    with pytest.raises(TokenError):
        issuer.verify(token)


def test_issued_mid_second_keeps_whole_second_iat(clock, issuer):
    clock.now = START + timedelta(milliseconds=900)
    payload = jwt.decode(issuer.issue("acc-123"), options={"verify_signature": False})
    assert payload["iat"] == int(START.timestamp())
    assert payload["exp"] == pytest.approx(START.timestamp() + 600.9)


def test_wrong_secret_rejected(issuer, clock):
    other = TokenIssuer(secret="another-secret-0123456789abcdef0123", expires_in=600, clock=clock)
    with pytest.raises(TokenError):
        issuer.verify(other.issue("acc-123"))


def test_tampered_payload_rejected(issuer):
    token = issuer.issue("acc-123")
    header, payload, signature = token.split(".")
    forged = jwt.encode({"sub": "acc-999", "iat": 0, "exp": 2**40}, "x" * 32)
    _, forged_payload, _ = forged.split(".")
    with pytest.raises(TokenError):
        issuer.verify(f"{header}.{forged_payload}.{signature}")


def test_wrong_algorithm_rejected(issuer, clock):
    now = int(clock().timestamp())
    token = jwt.encode(
        {"sub": "acc-123", "iat": now, "exp": now + 600}, SECRET, algorithm="HS512"
    )
    with pytest.raises(TokenError):
        issuer.verify(token)


def test_unsigned_token_rejected(issuer, clock):
    now = int(clock().timestamp())
    token = jwt.encode({"sub": "acc-123", "iat": now, "exp": now + 600}, None, algorithm="none")
    with pytest.raises(TokenError):
        issuer.verify(token)


def test_missing_claims_rejected(issuer, clock):
    now = int(clock().timestamp())
    token = jwt.encode({"sub": "acc-123", "iat": now}, SECRET, algorithm="HS256")
    with pytest.raises(TokenError):
        issuer.verify(token)


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer x.y.z"])
def test_malformed_rejected(issuer, garbage):
    with pytest.raises(TokenError):
        issuer.verify(garbage)


def test_all_failures_share_one_message(issuer, clock):
    expired = issuer.issue("acc-123")
    clock.advance(601)
    messages = set()
    for token in (expired, "garbage", issuer.issue("acc-123") + "x"):
        with pytest.raises(TokenError) as exc:
            issuer.verify(token)
        messages.add(str(exc.value))
    assert messages == {"Invalid token"}


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenIssuer(secret="", expires_in=600)


def test_non_positive_expiry_refused():
    with pytest.raises(ValueError):
        TokenIssuer(secret=SECRET, expires_in=0)
