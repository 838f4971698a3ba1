"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class TokenDecodeError(UtilError):
    """Raised when a bearer token cannot be decoded."""

    pass
