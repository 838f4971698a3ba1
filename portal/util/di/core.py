"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from portal.config import IdentitySettings, Settings, TokenSettings
from portal.domain.value import OriginAllowList
from portal.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_token_settings(self, settings: Settings) -> TokenSettings:
        """Provide token settings."""
        return settings.token

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        """Provide identity provider settings."""
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_origin_allow_list(self, settings: Settings) -> OriginAllowList:
        """Freeze ALLOWED_ORIGINS into the allow-list used for the app lifetime."""
        return OriginAllowList(origins=tuple(settings.allowed_origins))
