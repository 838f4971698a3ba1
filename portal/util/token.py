"""Bearer token codecs.

Two wire formats share the same claims:

- ``base64``: standard base64 of compact JSON. Any holder can decode it,
  nothing detects tampering. Partner sites rely on reading it directly.
- ``jwt``: the claims signed with HS256 (PyJWT). Readable, but tampering
  is detected.
"""

import base64
import binascii
import json
from typing import Any

import jwt

from portal.config import TokenSettings
from portal.util.error import TokenDecodeError


def encode_base64(claims: dict[str, Any]) -> str:
    """Encode claims as base64 JSON.

    Args:
        claims: JSON-serializable claims

    Returns:
        Base64 token string
    """
    raw = json.dumps(claims, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_base64(token: str) -> dict[str, Any]:
    """Decode a base64 JSON token.

    URL-safe characters and missing padding are tolerated.

    Args:
        token: Token string

    Returns:
        Decoded claims

    Raises:
        TokenDecodeError: If the token is not base64 JSON object
    """
    normalized = token.strip().replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        raw = base64.b64decode(normalized, validate=True)
        claims = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
        raise TokenDecodeError(f"Malformed token: {e}") from e

    if not isinstance(claims, dict):
        raise TokenDecodeError("Token payload is not an object")
    return claims


def encode_jwt(claims: dict[str, Any], settings: TokenSettings) -> str:
    """Sign claims as a JWT.

    Args:
        claims: JSON-serializable claims
        settings: Token settings

    Returns:
        Encoded JWT
    """
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_jwt(token: str, settings: TokenSettings) -> dict[str, Any]:
    """Verify a JWT signature and return its claims.

    Expiry is not checked here, the claims carry their own expiresAt.

    Raises:
        TokenDecodeError: If the signature or structure is invalid
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": []},
        )
    except (jwt.InvalidTokenError, RecursionError) as e:
        raise TokenDecodeError(f"Invalid token: {e}") from e


def encode_token(claims: dict[str, Any], settings: TokenSettings) -> str:
    """Encode claims with the configured format."""
    if settings.format == "jwt":
        return encode_jwt(claims, settings)
    return encode_base64(claims)


def decode_token(token: str, settings: TokenSettings) -> dict[str, Any]:
    """Decode a token with the configured format.

    Raises:
        TokenDecodeError: If the token cannot be decoded
    """
    if settings.format == "jwt":
        return decode_jwt(token, settings)
    return decode_base64(token)
