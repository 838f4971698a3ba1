"""CORS headers for the cross-domain endpoints.

The headers are set per response rather than by middleware: they are
echoed only for an allow-listed transport origin, and the endpoint
answers its own preflight with 403 for anything else.
"""

from fastapi import Response

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"


def cors_headers(origin: str) -> dict[str, str]:
    """Headers allowing a verified origin."""
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Vary": "Origin",
    }


def apply_cors_headers(response: Response, origin: str) -> Response:
    """Set CORS headers for a verified origin on a response."""
    response.headers.update(cors_headers(origin))
    return response
