"""Identity provider domain service."""

import logfire

from portal.domain.model import Identity

from .base import Service


class IdentityProvider:
    """Generic identity provider interface.

    Implementations wrap the external credential store and session engine.
    """

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Verify credentials.

        Args:
            email: User email
            password: User password

        Returns:
            Authenticated identity

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            ProviderError: If the provider is unreachable or erroring
        """
        raise NotImplementedError

    async def sign_out(self, access_token: str | None) -> None:
        """End the provider session bound to an access token.

        Args:
            access_token: Provider access token, None when the caller has none
        """
        raise NotImplementedError

    async def get_user(self, access_token: str) -> Identity:
        """Resolve a provider access token to its identity.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            ProviderError: If the provider is unreachable or erroring
        """
        raise NotImplementedError

    async def sign_up(
        self, email: str, password: str, email_redirect_to: str | None = None
    ) -> Identity:
        """Create an account.

        Raises:
            RegistrationRejectedError: If the provider refuses the sign-up
            ProviderError: If the provider is unreachable or erroring
        """
        raise NotImplementedError

    async def reset_password_for_email(
        self, email: str, redirect_to: str | None = None
    ) -> None:
        """Send a password reset email when the address has an account.

        Never reports whether the account exists.

        Raises:
            ProviderError: If the provider is unreachable or erroring
        """
        raise NotImplementedError


class IdentityService(Service):
    """Domain service for identity provider operations."""

    def __init__(self, identity_provider: IdentityProvider) -> None:
        """Initialize identity service.

        Args:
            identity_provider: Identity provider implementation
        """
        self.identity_provider = identity_provider

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign a user in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            ProviderError: If the provider fails
        """
        with logfire.span("identity_service.sign_in"):
            identity = await self.identity_provider.sign_in_with_password(
                email, password
            )
            logfire.info("User signed in", subject_id=identity.id)
            return identity

    async def sign_out(self, access_token: str | None) -> None:
        """Sign the current provider session out."""
        with logfire.span(
            "identity_service.sign_out", has_access_token=access_token is not None
        ):
            await self.identity_provider.sign_out(access_token)
            logfire.info("User signed out")

    async def get_user(self, access_token: str) -> Identity:
        """Resolve the signed-in user behind an access token.

        Raises:
            NotAuthenticatedError: If the token is not accepted
        """
        with logfire.span("identity_service.get_user"):
            return await self.identity_provider.get_user(access_token)

    async def sign_up(
        self, email: str, password: str, email_redirect_to: str | None = None
    ) -> Identity:
        """Register a new account.

        Raises:
            RegistrationRejectedError: If the provider refuses the sign-up
        """
        with logfire.span("identity_service.sign_up"):
            identity = await self.identity_provider.sign_up(
                email, password, email_redirect_to
            )
            logfire.info("User signed up", subject_id=identity.id)
            return identity

    async def request_password_reset(
        self, email: str, redirect_to: str | None = None
    ) -> None:
        """Ask the provider to email a password reset link.

        The outcome does not depend on whether the email has an account.

        Raises:
            ProviderError: If the provider fails
        """
        with logfire.span("identity_service.request_password_reset"):
            await self.identity_provider.reset_password_for_email(email, redirect_to)
            logfire.info("Password reset requested")
