"""Unit tests for TokenService."""

import base64
import json

import pytest

from portal.config import TokenSettings
from portal.domain.model import SESSION_LIFETIME_MS, Identity
from portal.domain.service import TokenService
from portal.domain.value import SubjectId

ISSUED_AT = 1_700_000_000_000


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture
def token_service(clock) -> TokenService:
    return TokenService(TokenSettings(), clock=clock)


@pytest.fixture
def identity() -> Identity:
    return Identity(
        id=SubjectId("user-123"),
        email="alice@example.com",
        username="alice",
        avatar_url="https://example.com/a.png",
    )


class TestIssue:
    """Tests for token minting."""

    def test_token_is_base64_json_with_wire_names(self, token_service, identity):
        token = token_service.issue(identity)

        claims = json.loads(base64.b64decode(token))
        assert claims == {
            "id": "user-123",
            "email": "alice@example.com",
            "username": "alice",
            "timestamp": ISSUED_AT,
            "expiresAt": ISSUED_AT + SESSION_LIFETIME_MS,
        }

    def test_lifetime_is_24_hours(self):
        assert SESSION_LIFETIME_MS == 24 * 60 * 60 * 1000

    def test_display_name_falls_back_to_email_local_part(self, token_service):
        token = token_service.issue(
            Identity(id=SubjectId("user-9"), email="bob@example.com")
        )

        payload = token_service.parse(token)
        assert payload is not None
        assert payload.display_name == "bob"

    def test_absent_fields_are_omitted(self, token_service):
        token = token_service.issue(Identity(id=SubjectId("user-0")))

        claims = json.loads(base64.b64decode(token))
        assert "email" not in claims
        assert "username" not in claims


class TestParse:
    """Tests for token parsing."""

    def test_round_trip(self, token_service, identity):
        payload = token_service.parse(token_service.issue(identity))

        assert payload is not None
        assert payload.subject_id == identity.id
        assert payload.email == identity.email
        assert payload.display_name == "alice"
        assert payload.issued_at == ISSUED_AT
        assert payload.expires_at == ISSUED_AT + SESSION_LIFETIME_MS

    def test_live_at_exact_expiry(self, token_service, identity, clock):
        token = token_service.issue(identity)
        clock.now = ISSUED_AT + SESSION_LIFETIME_MS

        assert token_service.parse(token) is not None

    def test_expired_one_millisecond_after_expiry(self, token_service, identity, clock):
        token = token_service.issue(identity)
        clock.now = ISSUED_AT + SESSION_LIFETIME_MS + 1

        assert token_service.parse(token) is None

    @pytest.mark.parametrize(
        "token",
        [
            None,
            "",
            "not base64 at all!",
            base64.b64encode(b"not json").decode(),
            base64.b64encode(b"[1, 2, 3]").decode(),
            base64.b64encode(b'{"email": "a@b.c"}').decode(),
        ],
    )
    def test_malformed_tokens_yield_none(self, token_service, token):
        assert token_service.parse(token) is None

    def test_deeply_nested_json_yields_none(self, token_service):
        token = base64.b64encode(b"[" * 100_000).decode()

        assert token_service.parse(token) is None

    def test_partner_minted_token_is_accepted(self, token_service):
        """Any holder can build a base64 token; the format has no integrity."""
        claims = {"id": "x", "timestamp": ISSUED_AT, "expiresAt": ISSUED_AT + 1}
        token = base64.b64encode(json.dumps(claims).encode()).decode()

        payload = token_service.parse(token)
        assert payload is not None
        assert payload.subject_id == "x"


class TestJwtFormat:
    """Tests for the signed token format."""

    @pytest.fixture
    def jwt_service(self, clock) -> TokenService:
        return TokenService(
            TokenSettings(format="jwt", jwt_secret="test-secret-0123456789abcdef0123"),
            clock=clock,
        )

    def test_round_trip(self, jwt_service, identity):
        token = jwt_service.issue(identity)

        assert token.count(".") == 2
        payload = jwt_service.parse(token)
        assert payload is not None
        assert payload.subject_id == identity.id
        assert payload.expires_at == ISSUED_AT + SESSION_LIFETIME_MS

    def test_tampered_token_is_rejected(self, jwt_service, identity):
        header, claims, signature = jwt_service.issue(identity).split(".")
        forged = json.dumps({"id": "admin", "timestamp": 0, "expiresAt": 2**50})
        forged_claims = base64.urlsafe_b64encode(forged.encode()).decode().rstrip("=")

        assert jwt_service.parse(f"{header}.{forged_claims}.{signature}") is None

    def test_expired_jwt_is_rejected(self, jwt_service, identity, clock):
        token = jwt_service.issue(identity)
        clock.now = ISSUED_AT + SESSION_LIFETIME_MS + 1

        assert jwt_service.parse(token) is None

    def test_base64_token_is_rejected_in_jwt_mode(self, token_service, jwt_service, identity):
        assert jwt_service.parse(token_service.issue(identity)) is None
