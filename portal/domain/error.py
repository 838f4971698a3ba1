"""Domain layer errors.

Each error carries the deterministic, human-readable message that is
returned to callers.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class UnauthorizedOriginError(DomainError):
    """Raised when a request origin is not on the allow-list."""

    def __init__(self, origin: str | None = None):
        self.origin = origin
        super().__init__("Unauthorized origin")


class InvalidCredentialsError(DomainError):
    """Raised for any sign-in failure.

    Never distinguishes an unknown email from a wrong password.
    """

    def __init__(self):
        super().__init__("Invalid email or password")


class TokenInvalidOrExpiredError(DomainError):
    """Raised when a bearer token cannot be decoded or has expired."""

    def __init__(self):
        super().__init__("Token is invalid or expired")


class NotAuthenticatedError(DomainError):
    """Raised when an endpoint requires a signed-in user."""

    def __init__(self):
        super().__init__("Authentication required")


class UnknownActionError(DomainError):
    """Raised for an unsupported cross-domain action."""

    def __init__(self, action: str | None):
        self.action = action
        super().__init__("Invalid action")


class InvalidReturnUrlError(DomainError):
    """Raised when a return URL is not an absolute http(s) URL."""

    def __init__(self, return_url: str):
        self.return_url = return_url
        super().__init__("Invalid return URL")


class MissingFieldError(DomainError):
    """Raised when a required request field is absent."""

    def __init__(self, *fields: str):
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


class InviteCodeError(DomainError):
    """Base invite code error."""

    pass


class InviteCodeMissingError(InviteCodeError):
    """Raised when no invite code was supplied."""

    def __init__(self):
        super().__init__("Please enter an invite code")


class InviteCodeBadFormatError(InviteCodeError):
    """Raised when an invite code is not 6 letters or digits."""

    def __init__(self):
        super().__init__(
            "Invite code format is invalid, expected 6 letters and digits"
        )


class InviteCodeNotFoundError(InviteCodeError):
    """Raised when an invite code does not exist."""

    def __init__(self):
        super().__init__("Invite code does not exist")


class InviteCodeAlreadyUsedError(InviteCodeError):
    """Raised when an invite code has already been redeemed."""

    def __init__(self):
        super().__init__("Invite code has already been used")


class InviteCodeAlreadyUsedOrNotFoundError(InviteCodeError):
    """Raised when the conditional redemption update matched no row."""

    def __init__(self):
        super().__init__("Invite code has already been used or does not exist")


class DuplicateInviteCodeError(InviteCodeError):
    """Raised by a store when an inserted code violates the unique constraint."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invite code already exists: {code}")


class AllocationExhaustedError(InviteCodeError):
    """Raised when no unique invite code was found within the attempt budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Failed to generate invite code, please retry")


class RegistrationRejectedError(DomainError):
    """Raised when the identity provider refuses a sign-up."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
