"""Retry logic with exponential backoff for RPC calls."""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RetryConfig:
    """
    Configuration for retry behavior.

    Parameters
    ----------
    max_retries : int
        Maximum number of retry attempts
    base_delay : float
        Initial delay in seconds before first retry
    max_delay : float
        Maximum delay between retries
    exponential_base : float
        Base for exponential backoff calculation

    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    def get_delay(self, attempt: int) -> float:
        """
        Calculate delay for a given retry attempt using exponential backoff.

        Parameters
        ----------
        attempt : int
            Current attempt number (0-indexed)

        Returns
        -------
        float
            Delay in seconds

        """
        delay = self.base_delay * (self.exponential_base**attempt)
        return min(delay, self.max_delay)


def retry_call(
    func: Callable[..., T],
    *args: Any,
    config: RetryConfig | None = None,
    description: str = "call",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call a function, retrying failures with exponential backoff.

    Parameters
    ----------
    func : Callable[..., T]
        Function to call
    *args : Any
        Positional arguments for ``func``
    config : RetryConfig | None
        Retry configuration. Uses default config if None.
    description : str
        Label used in debug logs
    sleep : Callable[[float], None]
        Delay function

    Returns
    -------
    T
        Result of the first successful call

    Raises
    ------
    Exception
        The last exception once all attempts fail

    """
    if config is None:
        config = RetryConfig()

    last_exception: Exception | None = None
    max_attempts = config.max_retries + 1

    for attempt in range(max_attempts):
        try:
            return func(*args)
        except Exception as e:
            last_exception = e

            # Don't retry on last attempt
            if attempt == config.max_retries:
                break

            delay = config.get_delay(attempt)
            logger.debug(
                "%s failed (attempt %d/%d), retrying in %.1fs: %s",
                description,
                attempt + 1,
                max_attempts,
                delay,
                e,
            )
            sleep(delay)

    logger.debug("%s failed after %d attempts", description, max_attempts)
    raise last_exception  # type: ignore[misc]
