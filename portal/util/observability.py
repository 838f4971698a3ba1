"""Logfire setup for the portal auth service.

Spans cover the handshake actions, invite code allocation and redemption,
and calls to the identity provider. Outgoing Supabase requests and
invite code queries are traced through the httpx and SQLAlchemy
instrumentation. Request headers, tokens and passwords are never
recorded; invite codes appear masked to their first two characters.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from portal.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Spans leave the process only when OBSERVABILITY__SEND_TO_LOGFIRE says
    so, or, when that is unset, when OBSERVABILITY__LOGFIRE_TOKEN is set.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "portal-auth",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Traces every HTTP request with method, path and client host.
    Request headers are not captured: the Authorization header carries
    identity provider access tokens.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        """Map request attributes, handling both HTTP and WebSocket requests."""
        result = {**attributes}

        if hasattr(request, "method"):
            result["method"] = request.method

        if hasattr(request, "url"):
            result["path"] = request.url.path

        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host

        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument httpx client with Logfire.

    Traces identity provider calls made by the Supabase adapter.
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
