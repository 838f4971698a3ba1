"""Shared cross-domain models and redirect URL building."""

import json
from typing import Annotated, Any, Literal, Union
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from pydantic import Field

from portal.application.usecase.base import CamelModel
from portal.domain.error import InvalidReturnUrlError
from portal.domain.model import Identity, SessionTokenPayload

LOGIN_SUCCESS_MESSAGE = "LOGIN_SUCCESS"


class CrossDomainUser(CamelModel):
    """User as shown to partner sites."""

    id: str
    username: str | None = None
    email: str | None = None
    avatar: str | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "CrossDomainUser":
        return cls(
            id=identity.id,
            username=identity.display_name,
            email=identity.email,
            avatar=identity.avatar_url,
        )

    @classmethod
    def from_payload(
        cls, payload: SessionTokenPayload, avatar: str | None = None
    ) -> "CrossDomainUser":
        return cls(
            id=payload.subject_id,
            username=payload.display_name,
            email=payload.email,
            avatar=avatar,
        )


class RedirectDelivery(CamelModel):
    """Navigate the browser to a URL."""

    kind: Literal["redirect"] = "redirect"
    url: str


class LoginMessageData(CamelModel):
    user: CrossDomainUser
    token: str


class LoginMessage(CamelModel):
    type: Literal["LOGIN_SUCCESS"] = LOGIN_SUCCESS_MESSAGE
    data: LoginMessageData


class MessageDelivery(CamelModel):
    """Post a message to the opener window at targetOrigin, then close."""

    kind: Literal["message"] = "message"
    target_origin: str
    payload: LoginMessage


Delivery = Annotated[
    Union[RedirectDelivery, MessageDelivery], Field(discriminator="kind")
]


def validate_return_url(return_url: str) -> str:
    """Require an absolute http(s) URL.

    Raises:
        InvalidReturnUrlError: If the URL cannot carry query parameters
    """
    parts = urlsplit(return_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidReturnUrlError(return_url)
    return return_url


def build_redirect_url(base_url: str, params: dict[str, str]) -> str:
    """Set query parameters on a URL.

    Each parameter replaces the first same-named pair in place and drops
    any later duplicates; missing ones are appended. Other pairs and the
    fragment are kept.

    Raises:
        InvalidReturnUrlError: If base_url is not an absolute http(s) URL
    """
    parts = urlsplit(validate_return_url(base_url))
    pairs = parse_qsl(parts.query, keep_blank_values=True)

    for key, value in params.items():
        updated: list[tuple[str, str]] = []
        replaced = False
        for existing_key, existing_value in pairs:
            if existing_key != key:
                updated.append((existing_key, existing_value))
            elif not replaced:
                updated.append((key, value))
                replaced = True
        if not replaced:
            updated.append((key, value))
        pairs = updated

    # An empty path serializes as "/" once a query is present
    path = parts.path or "/"
    return urlunsplit(
        (parts.scheme, parts.netloc, path, urlencode(pairs), parts.fragment)
    )


def encode_user_info(user: CrossDomainUser) -> str:
    """Percent-encode the user JSON for the userInfo parameter.

    The result is encoded again when placed in the query string, so
    partner pages decode it twice.
    """
    raw: dict[str, Any] = user.model_dump(exclude_none=True)
    return quote(
        json.dumps(raw, separators=(",", ":"), ensure_ascii=False), safe="!~*'()"
    )
