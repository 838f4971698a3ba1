"""Supabase Auth (GoTrue) identity provider client.

Talks to the GoTrue REST API under ``{project_url}/auth/v1``.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
import logfire

from portal.adapter.error import ProviderError
from portal.domain.error import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    RegistrationRejectedError,
)
from portal.domain.model import Identity
from portal.domain.service.identity_service import IdentityProvider
from portal.domain.value import SubjectId

# Status codes GoTrue uses for rejected credentials or input
_REJECTED_STATUSES = {400, 401, 403, 422}


def identity_from_user(user: dict[str, Any]) -> Identity:
    """Map a GoTrue user object to an Identity.

    Args:
        user: User JSON as returned by GoTrue

    Returns:
        Identity with metadata-derived username and avatar
    """
    metadata = user.get("user_metadata") or {}
    return Identity(
        id=SubjectId(str(user["id"])),
        email=user.get("email"),
        username=metadata.get("username"),
        avatar_url=metadata.get("avatar_url"),
    )


def _json_object(response: httpx.Response) -> dict[str, Any]:
    """Parse a success body that must be a JSON object.

    Raises:
        ProviderError: If the body is not a JSON object
    """
    try:
        body = response.json()
    except ValueError as e:
        raise ProviderError(
            f"Identity provider returned a non-JSON body: HTTP {response.status_code}"
        ) from e
    if not isinstance(body, dict):
        raise ProviderError("Identity provider returned a non-object JSON body")
    return body


def _identity(user: Any) -> Identity:
    """Map a user object from a success body.

    Raises:
        ProviderError: If the object is not a user
    """
    if not isinstance(user, dict) or not user.get("id"):
        raise ProviderError("Identity provider returned a body without a user")
    return identity_from_user(user)


def _error_message(response: httpx.Response) -> str:
    """Best-effort human-readable message from a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return response.text
    return (
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )


class SupabaseIdentityProvider(IdentityProvider):
    """Base class for Supabase identity providers.

    Provides type distinction for dependency injection.
    """

    pass


class RealSupabaseIdentityProvider(SupabaseIdentityProvider):
    """Identity provider backed by a Supabase project."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Supabase client.

        Args:
            url: Supabase project URL
            anon_key: Project anon key
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.auth_url = f"{url.rstrip('/')}/auth/v1"
        self.anon_key = anon_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self.anon_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        """Send a request to the auth API.

        Raises:
            ProviderError: If the API cannot be reached or answers 5xx/429
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.request(
                    method,
                    f"{self.auth_url}{path}",
                    json=json,
                    headers=self._headers(access_token),
                )
        except httpx.HTTPError as e:
            logfire.error("Identity provider unreachable", path=path, error=str(e))
            raise ProviderError(f"Identity provider request failed: {e}") from e

        if response.status_code >= 500 or response.status_code == 429:
            logfire.error(
                "Identity provider error",
                path=path,
                status_code=response.status_code,
                error=_error_message(response),
            )
            raise ProviderError(
                f"Identity provider returned HTTP {response.status_code}"
            )

        return response

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Exchange email and password for a session.

        Raises:
            InvalidCredentialsError: If GoTrue rejects the credentials
            ProviderError: If GoTrue fails
        """
        response = await self._request(
            "POST",
            "/token?grant_type=password",
            json={"email": email, "password": password},
        )

        if response.status_code in _REJECTED_STATUSES:
            logfire.info(
                "Identity provider rejected credentials",
                status_code=response.status_code,
            )
            raise InvalidCredentialsError()

        if response.status_code != 200:
            raise ProviderError(
                f"Unexpected sign-in response: HTTP {response.status_code}"
            )

        user = _json_object(response).get("user")
        if not user:
            raise InvalidCredentialsError()
        return _identity(user)

    async def sign_out(self, access_token: str | None) -> None:
        """Revoke the session bound to an access token.

        Without an access token there is no provider session to end.
        An already-expired token is not an error.
        """
        if not access_token:
            logfire.debug("Sign-out without access token, nothing to revoke")
            return

        response = await self._request("POST", "/logout", access_token=access_token)
        if response.status_code in (401, 403, 404):
            logfire.info(
                "Sign-out for an already invalid session",
                status_code=response.status_code,
            )

    async def get_user(self, access_token: str) -> Identity:
        """Resolve an access token to its user.

        Raises:
            NotAuthenticatedError: If GoTrue does not accept the token
            ProviderError: If GoTrue fails
        """
        response = await self._request("GET", "/user", access_token=access_token)

        if response.status_code in _REJECTED_STATUSES:
            raise NotAuthenticatedError()

        if response.status_code != 200:
            raise ProviderError(
                f"Unexpected get-user response: HTTP {response.status_code}"
            )

        return _identity(_json_object(response))

    async def sign_up(
        self, email: str, password: str, email_redirect_to: str | None = None
    ) -> Identity:
        """Create an account, optionally with a confirmation redirect.

        Raises:
            RegistrationRejectedError: If GoTrue refuses the sign-up
            ProviderError: If GoTrue fails
        """
        path = "/signup"
        if email_redirect_to:
            path += "?" + urlencode({"redirect_to": email_redirect_to})

        response = await self._request(
            "POST", path, json={"email": email, "password": password}
        )

        if response.status_code in _REJECTED_STATUSES:
            raise RegistrationRejectedError(_error_message(response))

        if response.status_code != 200:
            raise ProviderError(
                f"Unexpected sign-up response: HTTP {response.status_code}"
            )

        body = _json_object(response)
        # With auto-confirm GoTrue returns a session wrapping the user
        return _identity(body.get("user") or body)

    async def reset_password_for_email(
        self, email: str, redirect_to: str | None = None
    ) -> None:
        """Ask GoTrue to send a recovery email.

        GoTrue answers the same for known and unknown addresses. A rejected
        request (malformed address) is logged and otherwise ignored so the
        caller learns nothing about the account.

        Raises:
            ProviderError: If GoTrue fails
        """
        path = "/recover"
        if redirect_to:
            path += "?" + urlencode({"redirect_to": redirect_to})

        response = await self._request("POST", path, json={"email": email})

        if response.status_code in _REJECTED_STATUSES:
            logfire.info(
                "Identity provider rejected password reset",
                status_code=response.status_code,
                error=_error_message(response),
            )
            return

        if response.status_code != 200:
            raise ProviderError(
                f"Unexpected recover response: HTTP {response.status_code}"
            )


class MockSupabaseIdentityProvider(SupabaseIdentityProvider):
    """Mock identity provider for testing.

    Holds accounts in memory and returns deterministic identities without
    making network calls. Access tokens have the form ``mock-access-<id>``.
    """

    MOCK_USER_ID = "8f14e45f-ceea-4e7a-9c1b-2d5b6f0a1c3e"
    MOCK_EMAIL = "alice@example.com"
    MOCK_PASSWORD = "correct-horse-battery"

    def __init__(self) -> None:
        """Initialize with one seeded account."""
        self._accounts: dict[str, tuple[str, Identity]] = {}
        self.signed_out_tokens: list[str | None] = []
        self.password_reset_requests: list[tuple[str, str | None]] = []
        self._add_account(
            self.MOCK_EMAIL,
            self.MOCK_PASSWORD,
            Identity(
                id=SubjectId(self.MOCK_USER_ID),
                email=self.MOCK_EMAIL,
                username="alice",
                avatar_url="https://example.com/alice.png",
            ),
        )

    def _add_account(self, email: str, password: str, identity: Identity) -> None:
        self._accounts[email] = (password, identity)

    @staticmethod
    def access_token_for(identity: Identity) -> str:
        """Access token the mock accepts for an identity."""
        return f"mock-access-{identity.id}"

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        account = self._accounts.get(email)
        if account is None or account[0] != password:
            raise InvalidCredentialsError()
        return account[1]

    async def sign_out(self, access_token: str | None) -> None:
        self.signed_out_tokens.append(access_token)

    async def get_user(self, access_token: str) -> Identity:
        for _, identity in self._accounts.values():
            if access_token == self.access_token_for(identity):
                return identity
        raise NotAuthenticatedError()

    async def sign_up(
        self, email: str, password: str, email_redirect_to: str | None = None
    ) -> Identity:
        if email in self._accounts:
            raise RegistrationRejectedError("User already registered")
        identity = Identity(id=SubjectId(f"mock-{len(self._accounts) + 1}"), email=email)
        self._add_account(email, password, identity)
        return identity

    async def reset_password_for_email(
        self, email: str, redirect_to: str | None = None
    ) -> None:
        # Recorded for every address, like GoTrue's uniform answer
        self.password_reset_requests.append((email, redirect_to))
