from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.tokens import InvalidToken, TokenService

ACCESS_SECRET = "access-secret-0123456789abcdef-0123"
REFRESH_SECRET = "refresh-secret-0123456789abcdef-012"


@pytest.fixture
def service():
    return TokenService(ACCESS_SECRET, REFRESH_SECRET)


def test_access_token_resolves_to_issuing_user(service):
    pair = service.issue_token_pair("user-42")
    assert service.verify_access_token(pair.access_token) == "user-42"
    assert service.verify_refresh_token(pair.refresh_token) == "user-42"


def test_pair_tokens_are_distinct(service):
    pair = service.issue_token_pair("user-42")
    assert pair.access_token != pair.refresh_token


def test_expiry_windows():
    issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
    service = TokenService(ACCESS_SECRET, REFRESH_SECRET, clock=lambda: issued)
    pair = service.issue_token_pair("u1")

    access = jwt.decode(pair.access_token, options={"verify_signature": False})
    refresh = jwt.decode(pair.refresh_token, options={"verify_signature": False})
    assert access["exp"] - access["iat"] == 3600
    assert refresh["exp"] - refresh["iat"] == 7 * 24 * 3600
    assert access["type"] == "access"
    assert refresh["type"] == "refresh"


def test_expired_access_token_rejected():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    service = TokenService(ACCESS_SECRET, REFRESH_SECRET, clock=lambda: past)
    token = service.issue_access_token("user-1")

    with pytest.raises(InvalidToken):
        service.verify_access_token(token)


def test_expired_refresh_token_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=8)
    service = TokenService(ACCESS_SECRET, REFRESH_SECRET, clock=lambda: past)
    token = service.issue_token_pair("user-1").refresh_token

    with pytest.raises(InvalidToken):
        service.verify_refresh_token(token)


def test_refresh_token_not_accepted_as_access(service):
    pair = service.issue_token_pair("user-1")
    with pytest.raises(InvalidToken):
        service.verify_access_token(pair.refresh_token)
    with pytest.raises(InvalidToken):
        service.verify_refresh_token(pair.access_token)


def test_kind_checked_even_with_shared_secret():
    service = TokenService(ACCESS_SECRET, ACCESS_SECRET)
    pair = service.issue_token_pair("user-1")
    with pytest.raises(InvalidToken):
        service.verify_access_token(pair.refresh_token)


def test_token_from_other_secret_rejected(service):
    other = TokenService("other-access-secret-0123456789abcdef", "other-refresh-secret-0123456789abcdef")
    with pytest.raises(InvalidToken):
        service.verify_access_token(other.issue_access_token("user-1"))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_rejected(service, token):
    with pytest.raises(InvalidToken):
        service.verify_access_token(token)


def test_tampered_payload_rejected(service):
    token = service.issue_access_token("user-1")
    header, payload, signature = token.split(".")
    forged = jwt.encode({"id": "admin", "type": "access", "exp": 9999999999}, "guessed-secret-0123456789abcdef-xyz", algorithm="HS256")
    forged_payload = forged.split(".")[1]
    with pytest.raises(InvalidToken):
        service.verify_access_token(".".join([header, forged_payload, signature]))


def test_token_without_identity_rejected(service):
    token = jwt.encode(
        {"type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        ACCESS_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        service.verify_access_token(token)


def test_revocation_check_rejects_flagged_tokens():
    revoked = {"user-2"}
    service = TokenService(ACCESS_SECRET, REFRESH_SECRET, revocation_check=lambda claims: claims["id"] in revoked)

    assert service.verify_access_token(service.issue_access_token("user-1")) == "user-1"
    with pytest.raises(InvalidToken):
        service.verify_access_token(service.issue_access_token("user-2"))


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("", REFRESH_SECRET)


def test_from_settings_uses_configured_ttl(settings):
    service = TokenService.from_settings(settings)
    token = service.issue_access_token("u1")
    claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == settings.access_token_ttl_minutes * 60
