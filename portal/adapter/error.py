"""Infrastructure layer errors.

Both are reported to callers as a generic internal error.
"""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """Identity provider unreachable or erroring."""

    pass


class StoreError(AdapterError):
    """Record store unreachable or erroring."""

    pass
