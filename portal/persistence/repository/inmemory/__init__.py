"""In-memory repository implementations for testing."""

from .invite_code import InMemoryInviteCodeRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryInviteCodeRepository",
    "InMemoryProfileRepository",
]
