"""Unit tests for Logfire configuration."""

import logfire
import pytest

from portal.config import ObservabilitySettings, Settings
from portal.util.observability import configure_logfire


@pytest.fixture
def configured(monkeypatch):
    calls: list[dict] = []
    monkeypatch.setattr(logfire, "configure", lambda **kwargs: calls.append(kwargs))
    return calls


def make_settings(**observability) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        observability=ObservabilitySettings(**observability),
    )


@pytest.mark.parametrize(
    "observability,expected",
    [
        ({}, False),
        ({"logfire_token": "lf-token"}, True),
        ({"logfire_token": "lf-token", "send_to_logfire": False}, False),
        ({"send_to_logfire": True}, True),
    ],
)
def test_send_to_logfire_priority(configured, observability, expected):
    configure_logfire(make_settings(**observability))

    assert configured[0]["send_to_logfire"] is expected
    assert configured[0]["service_name"] == "portal-auth"
    assert configured[0]["environment"] == "test"


def test_token_passed_only_when_set(configured):
    configure_logfire(make_settings())
    configure_logfire(make_settings(logfire_token="lf-token"))

    assert "token" not in configured[0]
    assert configured[1]["token"] == "lf-token"
