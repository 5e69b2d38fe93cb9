"""Resilient Anthropic Client: verifies retry policy and error mapping.

Invariants:
    - transient failures (429, 5xx, connection) retried up to max_retries
    - timeouts and other 4xx fail immediately
    - every failure surfaces as ExternalServiceError
"""

import httpx
import pytest
from anthropic import (
    APIConnectionError, APITimeoutError, BadRequestError,
    InternalServerError, RateLimitError,
)

from app.core.errors import ExternalServiceError
from app.infrastructure.anthropic_client import ResilientAnthropicClient

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, status: int):
    return cls(
        message=f"HTTP {status}",
        response=httpx.Response(status, request=_REQUEST),
        body=None,
    )


class _Usage:
    input_tokens = 10
    output_tokens = 20


class _Response:
    usage = _Usage()


def _client(outcomes: list, max_retries: int = 2):
    """Client whose messages.create pops outcomes (exception or response)."""
    client = ResilientAnthropicClient(
        api_key="sk-ant-test", max_retries=max_retries, base_delay_ms=0,
    )
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client.client.messages.create = create
    return client, calls


async def _call(client):
    return await client.create_message(
        model="claude-test", max_tokens=10, system="s",
        messages=[{"role": "user", "content": "hi"}],
    )


async def test_success_on_first_attempt():
    response = _Response()
    client, calls = _client([response])
    assert await _call(client) is response
    assert len(calls) == 1


async def test_rate_limit_retried():
    response = _Response()
    client, calls = _client([_status_error(RateLimitError, 429), response])
    assert await _call(client) is response
    assert len(calls) == 2


async def test_server_error_retried_until_exhausted():
    client, calls = _client(
        [_status_error(InternalServerError, 500) for _ in range(3)],
        max_retries=2,
    )
    with pytest.raises(ExternalServiceError):
        await _call(client)
    assert len(calls) == 3


async def test_connection_error_retried():
    response = _Response()
    client, calls = _client([APIConnectionError(request=_REQUEST), response])
    assert await _call(client) is response
    assert len(calls) == 2


async def test_timeout_not_retried():
    client, calls = _client([APITimeoutError(request=_REQUEST)])
    with pytest.raises(ExternalServiceError) as exc:
        await _call(client)
    assert "timed out" in exc.value.message
    assert len(calls) == 1


async def test_bad_request_not_retried():
    client, calls = _client([_status_error(BadRequestError, 400)])
    with pytest.raises(ExternalServiceError):
        await _call(client)
    assert len(calls) == 1
