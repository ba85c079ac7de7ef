"""Tests for the retry envelope."""

import logging
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from linkscrape.core.errors import TransportError
from linkscrape.core.interfaces import RetryableOperation
from linkscrape.engine.retry import RetryEnvelope, RetryPolicy


class ScriptedOperation(RetryableOperation):
    """Operation that plays back a fixed list of outcomes."""

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.attempts = 0

    @property
    def description(self) -> str:
        return "scripted request"

    async def attempt(self) -> httpx.Response:
        outcome = self._outcomes[self.attempts]
        self.attempts += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _retry_records(caplog):
    return [r for r in caplog.records if "Retry attempt" in r.getMessage()]


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_default_values(self):
        """Test default retry budget and delay."""
        policy = RetryPolicy()
        assert policy.max_retries == 3
        assert policy.delay == 2.0
        assert policy.max_attempts == 4


class TestRetryEnvelope:
    """Tests for RetryEnvelope."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, caplog):
        """Test that a 2xx response returns without retrying."""
        caplog.set_level(logging.WARNING, logger="linkscrape.engine.retry")
        operation = ScriptedOperation([httpx.Response(200, json={"ok": True})])

        with patch("linkscrape.engine.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            response = await RetryEnvelope().run(operation)

        assert response.status_code == 200
        assert operation.attempts == 1
        sleep.assert_not_awaited()
        assert _retry_records(caplog) == []

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self, caplog):
        """Test two transport failures followed by success."""
        caplog.set_level(logging.WARNING, logger="linkscrape.engine.retry")
        operation = ScriptedOperation(
            [
                httpx.ConnectError("connection refused"),
                httpx.ReadTimeout("timed out"),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        with patch("linkscrape.engine.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            response = await RetryEnvelope().run(operation)

        assert response.status_code == 200
        assert operation.attempts == 3
        records = _retry_records(caplog)
        assert len(records) == 2
        assert "Retry attempt 1" in records[0].getMessage()
        assert "Retry attempt 2" in records[1].getMessage()
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_fixed_delay_between_attempts(self):
        """Test that every wait uses the same fixed delay."""
        operation = ScriptedOperation(
            [httpx.Response(503), httpx.Response(502), httpx.Response(500), httpx.Response(200)]
        )

        with patch("linkscrape.engine.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await RetryEnvelope().run(operation)

        assert [call.args[0] for call in sleep.await_args_list] == [2.0, 2.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhaustion_after_four_attempts(self):
        """Test that four transport failures raise a terminal error."""
        operation = ScriptedOperation([httpx.ConnectError("dns failure")] * 4)

        with patch("linkscrape.engine.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(TransportError) as exc_info:
                await RetryEnvelope().run(operation)

        assert operation.attempts == 4
        assert sleep.await_count == 3
        assert exc_info.value.attempts == 4
        assert exc_info.value.status_code is None
        assert "after 4 attempts" in str(exc_info.value)
        assert "dns failure" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_success_status_is_retried_and_reported(self):
        """Test that non-2xx statuses are retried like transport errors."""
        operation = ScriptedOperation([httpx.Response(503)] * 4)
        envelope = RetryEnvelope(RetryPolicy(delay=0))

        with pytest.raises(TransportError) as exc_info:
            await envelope.run(operation)

        assert operation.attempts == 4
        assert exc_info.value.status_code == 503
        assert "HTTP error after 4 attempts: 503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_last_outcome_wins(self):
        """Test that the terminal error reports the last failure seen."""
        operation = ScriptedOperation(
            [
                httpx.Response(500),
                httpx.Response(500),
                httpx.Response(500),
                httpx.ConnectError("reset by peer"),
            ]
        )

        with pytest.raises(TransportError) as exc_info:
            await RetryEnvelope(RetryPolicy(delay=0)).run(operation)

        assert exc_info.value.status_code is None
        assert "reset by peer" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.DecodingError("bad gzip"),
            httpx.TooManyRedirects("redirect loop"),
            httpx.ReadTimeout("timed out"),
        ],
    )
    async def test_any_request_error_is_retried(self, error):
        """Test that every httpx request error counts as a failed attempt."""
        operation = ScriptedOperation([error, httpx.Response(200)])

        response = await RetryEnvelope(RetryPolicy(delay=0)).run(operation)

        assert response.status_code == 200
        assert operation.attempts == 2

    @pytest.mark.asyncio
    async def test_decoding_error_exhausts_to_transport_error(self):
        operation = ScriptedOperation([httpx.DecodingError("bad gzip")] * 4)

        with pytest.raises(TransportError, match="bad gzip") as exc_info:
            await RetryEnvelope(RetryPolicy(delay=0)).run(operation)

        assert exc_info.value.attempts == 4

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        """Test that a zero retry budget makes exactly one attempt."""
        operation = ScriptedOperation([httpx.Response(500)])

        with pytest.raises(TransportError) as exc_info:
            await RetryEnvelope(RetryPolicy(max_retries=0, delay=0)).run(operation)

        assert operation.attempts == 1
        assert exc_info.value.attempts == 1
