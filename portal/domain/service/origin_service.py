"""Origin validation domain service."""

import logfire

from portal.domain.value import OriginAllowList

from .base import Service


class OriginValidator(Service):
    """Checks declared origins against the configured allow-list.

    Pure predicate: exact string membership, no wildcarding and no
    scheme/port normalization.
    """

    def __init__(self, allow_list: OriginAllowList) -> None:
        """Initialize origin validator.

        Args:
            allow_list: Immutable allow-list built at startup
        """
        self.allow_list = allow_list

    def validate(self, origin: str | None) -> bool:
        """Check whether an origin may use cross-domain endpoints.

        Args:
            origin: Origin header value or body origin (may be absent)

        Returns:
            True only for a literal member of the allow-list
        """
        if not origin:
            return False

        allowed = origin in self.allow_list
        if not allowed:
            logfire.warn("Origin rejected", origin=origin)
        return allowed
