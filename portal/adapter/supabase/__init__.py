"""Supabase Auth identity provider adapter."""

from .client import (
    MockSupabaseIdentityProvider,
    RealSupabaseIdentityProvider,
    SupabaseIdentityProvider,
)

__all__ = [
    "SupabaseIdentityProvider",
    "RealSupabaseIdentityProvider",
    "MockSupabaseIdentityProvider",
]
