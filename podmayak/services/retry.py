"""
Retry policy for calls to the generative backend.

Failures are classified once, at the remote-call boundary, into
TransientBackendError or FatalBackendError (see `classify_backend_error`).
`with_retry` only looks at that tag: transient errors are retried with
exponential backoff, everything else propagates unchanged.
"""
import asyncio
import json
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from podmayak.core.errors import BackendError, FatalBackendError, TransientBackendError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_STATUS_CODES = {500, 503}
TRANSIENT_MARKERS = ("overloaded", "internal error", "unavailable", "503", "500")

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_DELAY = 3.0  # seconds


def _serialize_error(error: BaseException) -> str:
    details = getattr(error, "details", None)
    if details is not None:
        try:
            return json.dumps(details, default=str)
        except (TypeError, ValueError):
            return str(details)
    return repr(error)


def is_transient_error(error: BaseException) -> bool:
    """
    Heuristic transient-vs-fatal check for raw SDK/HTTP errors.

    Looks at numeric `status`/`code` attributes first, then for well-known
    markers in the message and serialized form. Substring matching can
    misfire on unrelated text containing "500"; keep all such logic here.
    """
    if isinstance(error, TransientBackendError):
        return True
    if isinstance(error, BackendError):
        return False

    for attr in ("code", "status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and value in TRANSIENT_STATUS_CODES:
            return True
        if isinstance(value, str) and value.upper() == "UNAVAILABLE":
            return True

    message = str(error).lower()
    serialized = _serialize_error(error).lower()
    return any(marker in message or marker in serialized for marker in TRANSIENT_MARKERS)


def classify_backend_error(error: BaseException, context: str = "") -> BackendError:
    """Wrap a raw backend exception into the tagged error the retry policy understands"""
    if isinstance(error, BackendError):
        return error

    message = f"{context}: {error}" if context else str(error)
    if is_transient_error(error):
        return TransientBackendError(message, cause=error)
    return FatalBackendError(message, cause=error)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> T:
    """
    Run `operation`, retrying TransientBackendError with exponential backoff.

    Makes at most `max_retries + 1` attempts. The delay starts at
    `initial_delay` seconds and doubles after every retry, without jitter.
    Any other exception, or a transient one after the last attempt, is
    re-raised as is.
    """
    sleep = sleep or asyncio.sleep
    retries_left = max_retries
    delay = initial_delay

    while True:
        try:
            return await operation()
        except TransientBackendError as e:
            if retries_left <= 0:
                logger.error(f"Backend still unavailable after {max_retries} retries: {e}")
                raise
            logger.warning(
                f"Backend unavailable, retrying in {delay:.1f}s... ({retries_left} attempts left): {e}"
            )
            await sleep(delay)
            retries_left -= 1
            delay *= 2
