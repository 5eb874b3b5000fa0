"""
Unit tests for the backend retry policy
Tests error classification and exponential backoff
"""
import pytest
from unittest.mock import AsyncMock

from podmayak.core.errors import FatalBackendError, GenerationError, TransientBackendError
from podmayak.services.retry import classify_backend_error, is_transient_error, with_retry


class FakeAPIError(Exception):
    """Mimics an SDK error carrying an HTTP status"""

    def __init__(self, message, code=None, status=None, details=None):
        super().__init__(message)
        self.code = code
        self.status = status
        self.details = details


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


class TestIsTransientError:
    """Tests for transient vs fatal classification of raw errors"""

    @pytest.mark.unit
    @pytest.mark.parametrize("code", [500, 503])
    def test_numeric_server_errors_are_transient(self, code):
        assert is_transient_error(FakeAPIError("boom", code=code)) is True

    @pytest.mark.unit
    def test_unavailable_status_is_transient(self):
        assert is_transient_error(FakeAPIError("boom", status="UNAVAILABLE")) is True

    @pytest.mark.unit
    def test_overloaded_message_is_transient(self):
        assert is_transient_error(RuntimeError("The model is overloaded. Please try again later.")) is True

    @pytest.mark.unit
    def test_markers_in_details_are_transient(self):
        error = FakeAPIError("request failed", details={"error": {"message": "Internal error encountered"}})
        assert is_transient_error(error) is True

    @pytest.mark.unit
    def test_client_errors_are_fatal(self):
        assert is_transient_error(FakeAPIError("API key not valid", code=400, status="INVALID_ARGUMENT")) is False

    @pytest.mark.unit
    def test_tagged_errors_keep_their_tag(self):
        assert is_transient_error(TransientBackendError("busy")) is True
        assert is_transient_error(FatalBackendError("Internal error")) is False


class TestClassifyBackendError:
    """Tests for wrapping raw errors at the call boundary"""

    @pytest.mark.unit
    def test_wraps_transient(self):
        raw = FakeAPIError("unavailable", code=503)
        error = classify_backend_error(raw, context="gemini")

        assert isinstance(error, TransientBackendError)
        assert error.cause is raw
        assert error.message.startswith("gemini:")

    @pytest.mark.unit
    def test_wraps_fatal(self):
        error = classify_backend_error(ValueError("permission denied"))
        assert isinstance(error, FatalBackendError)

    @pytest.mark.unit
    def test_already_classified_errors_pass_through(self):
        error = GenerationError("No image generated.")
        assert classify_backend_error(error) is error


class TestWithRetry:
    """Tests for exponential backoff"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        operation = AsyncMock(return_value="ok")
        sleep = RecordingSleep()

        assert await with_retry(operation, sleep=sleep) == "ok"
        assert operation.await_count == 1
        assert sleep.delays == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_retries_transient_then_succeeds(self):
        operation = AsyncMock(side_effect=[TransientBackendError("busy"), TransientBackendError("busy"), "image"])
        sleep = RecordingSleep()

        assert await with_retry(operation, sleep=sleep) == "image"
        assert operation.await_count == 3
        assert sleep.delays == [3.0, 6.0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        operation = AsyncMock(side_effect=TransientBackendError("still busy"))
        sleep = RecordingSleep()

        with pytest.raises(TransientBackendError):
            await with_retry(operation, max_retries=5, initial_delay=3.0, sleep=sleep)

        assert operation.await_count == 6
        assert sleep.delays == [3.0, 6.0, 12.0, 24.0, 48.0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fatal_errors_are_not_retried(self):
        operation = AsyncMock(side_effect=FatalBackendError("bad key"))
        sleep = RecordingSleep()

        with pytest.raises(FatalBackendError):
            await with_retry(operation, sleep=sleep)

        assert operation.await_count == 1
        assert sleep.delays == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self):
        operation = AsyncMock(side_effect=TransientBackendError("busy"))

        with pytest.raises(TransientBackendError):
            await with_retry(operation, max_retries=0, sleep=RecordingSleep())

        assert operation.await_count == 1
