"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from portal.adapter.supabase import RealSupabaseIdentityProvider
from portal.config import IdentitySettings
from portal.domain.service import IdentityProvider
from portal.util.di.base import ProviderBase


class IdentityComponentProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityComponentProvider(IdentityComponentProvider):
    """Production identity provider backed by Supabase Auth."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(
        self, identity_settings: IdentitySettings
    ) -> IdentityProvider:
        """Provide Supabase identity provider.

        Raises:
            ValueError: If the anon key is not configured
        """
        if not identity_settings.anon_key:
            raise ValueError("Identity provider anon key must be configured")

        return RealSupabaseIdentityProvider(
            url=identity_settings.url,
            anon_key=identity_settings.anon_key,
            timeout_seconds=identity_settings.timeout_seconds,
        )
