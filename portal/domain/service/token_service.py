"""Bearer token domain service."""

import time
from typing import Callable

import logfire
from pydantic import ValidationError

from portal.config import TokenSettings
from portal.domain.model import Identity, SessionTokenPayload
from portal.util.error import TokenDecodeError
from portal.util.token import decode_token, encode_token

from .base import Service


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


class TokenService(Service):
    """Issues and parses cross-domain bearer tokens.

    Tokens are immutable from mint to expiry; there is no refresh.
    """

    def __init__(
        self, token_settings: TokenSettings, clock: Callable[[], int] = now_ms
    ) -> None:
        """Initialize token service.

        Args:
            token_settings: Token format settings
            clock: Millisecond clock
        """
        self.token_settings = token_settings
        self.clock = clock

    def issue(self, identity: Identity) -> str:
        """Mint a token for a freshly authenticated identity.

        Args:
            identity: Authenticated identity

        Returns:
            Opaque token string
        """
        with logfire.span("token_service.issue", subject_id=identity.id):
            payload = SessionTokenPayload.mint(identity, issued_at=self.clock())
            token = encode_token(payload.to_claims(), self.token_settings)
            logfire.info(
                "Token issued",
                subject_id=identity.id,
                format=self.token_settings.format,
                expires_at=payload.expires_at,
            )
            return token

    def parse(self, token: str | None) -> SessionTokenPayload | None:
        """Decode a token and check it is still live.

        Never raises: malformed, structurally invalid and expired tokens
        all yield None.

        Args:
            token: Token string

        Returns:
            Payload if the token is valid and live, None otherwise
        """
        if not token:
            return None

        try:
            payload = SessionTokenPayload.model_validate(
                decode_token(token, self.token_settings)
            )
        except (TokenDecodeError, ValidationError) as e:
            logfire.debug("Token rejected", error=str(e))
            return None

        if not payload.is_live(self.clock()):
            logfire.debug(
                "Token expired",
                subject_id=payload.subject_id,
                expires_at=payload.expires_at,
            )
            return None

        return payload
