# chuk_oauth_token_retriever/retry.py
"""Exponential backoff for token endpoint calls."""

import logging
import time
from typing import Callable, Generic, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, wait_exponential

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_retryable(error: BaseException) -> bool:
    return getattr(error, "retryable", False)


class Retry(Generic[T]):
    """
    Call a function until it succeeds or the backoff window is used up.

    The wait after attempt ``n`` is ``retry_backoff_ms * 2 ** (n - 1)``,
    capped by whatever remains of the ``retry_backoff_max_ms`` window.
    Errors whose ``retryable`` flag is false are raised straight away.
    """

    def __init__(
        self,
        retry_backoff_ms: int = 100,
        retry_backoff_max_ms: int = 10000,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if retry_backoff_ms < 0:
            raise InvalidArgumentError(
                f"retry_backoff_ms value ({retry_backoff_ms}) must be non-negative"
            )
        if retry_backoff_max_ms < 0:
            raise InvalidArgumentError(
                f"retry_backoff_max_ms value ({retry_backoff_max_ms}) "
                "must be non-negative"
            )
        if retry_backoff_max_ms < retry_backoff_ms:
            raise InvalidArgumentError(
                f"retry_backoff_max_ms value ({retry_backoff_max_ms}) is less "
                f"than retry_backoff_ms value ({retry_backoff_ms})"
            )

        self.retry_backoff_ms = retry_backoff_ms
        self.retry_backoff_max_ms = retry_backoff_max_ms
        self._sleep = sleep
        self._clock = clock

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        wait = retry_state.next_action.sleep if retry_state.next_action else 0
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Attempt {retry_state.attempt_number} to make call resulted in an "
            f"error; sleeping {wait * 1000:.0f} ms before retrying: {error}"
        )

    def execute(self, call: Callable[[], T]) -> T:
        """
        Run ``call`` with retries.

        Args:
            call: Zero-argument callable to run

        Returns:
            The first successful result

        Raises:
            TokenRetrievalError: The non-retryable error, or the last
                retryable error once the backoff window is exhausted
        """
        deadline = self._clock() + self.retry_backoff_max_ms / 1000.0
        backoff = wait_exponential(multiplier=self.retry_backoff_ms / 1000.0)

        def wait(retry_state: RetryCallState) -> float:
            return max(0.0, min(backoff(retry_state), deadline - self._clock()))

        def stop(retry_state: RetryCallState) -> bool:
            return wait(retry_state) <= 0

        retrying = Retrying(
            retry=retry_if_exception(_is_retryable),
            wait=wait,
            stop=stop,
            sleep=self._sleep,
            before_sleep=self._log_retry,
            reraise=True,
        )
        return retrying(call)
