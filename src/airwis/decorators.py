# airwis: city air quality reports from the WAQI feed
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Function decorators for cross-cutting concerns.

This module provides the retry and logging wrappers applied to the feed
client, so the HTTP code itself stays a plain request-and-parse function.
"""

import inspect
import logging
import time
from functools import wraps
from typing import Callable, TypeVar

import requests
from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable)

logger = logging.getLogger(__name__)


def is_server_error(exception: BaseException) -> bool:
    """Only HTTP 5xx responses are worth retrying, never 4xx client errors."""
    if isinstance(exception, requests.exceptions.HTTPError):
        if exception.response is not None:
            return 500 <= exception.response.status_code < 600
    return False


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
) -> Callable[[F], F]:
    """
    Decorator to add exponential backoff retry logic to a function.

    Retries on connection errors, timeouts and HTTP 5xx errors. Waits grow
    exponentially, bounded by min_wait and max_wait. The last exception is
    re-raised once attempts run out.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        min_wait: Minimum wait time between retries in seconds (default: 1.0)
        max_wait: Maximum wait time between retries in seconds (default: 10.0)
        multiplier: Multiplier for exponential backoff (default: 2.0)

    Example:
        >>> @with_retry(max_attempts=5, min_wait=2.0)
        ... def fetch_feed(url):
        ...     response = requests.get(url, timeout=10)
        ...     response.raise_for_status()
        ...     return response.json()
    """

    def decorator(func: F) -> F:
        @retry(
            retry=(
                retry_if_exception_type(requests.exceptions.ConnectionError)
                | retry_if_exception_type(requests.exceptions.Timeout)
                | retry_if_exception(is_server_error)
            ),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            after=after_log(logger, logging.DEBUG),
            reraise=True,
        )
        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def with_logging(
    logger_name: str | None = None, subject: str = "city"
) -> Callable[[F], F]:
    """
    Decorator to log a feed call's subject, duration and outcome.

    The value of the ``subject`` argument (the city by default) is logged at
    INFO on entry and exit, with the elapsed time. Other arguments are never
    logged, so the feed token stays out of logs. Failures are logged once at
    WARNING without a traceback and re-raised; the caller that handles the
    error owns the full traceback.

    Args:
        logger_name: Name of logger to use. If None, uses the module name.
        subject: Name of the argument identifying what is being fetched

    Example:
        >>> @with_logging()
        ... def fetch_reading(city, config=None):
        ...     ...
    """

    def decorator(func: F) -> F:
        func_logger = logging.getLogger(logger_name or func.__module__)
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            target = signature.bind_partial(*args, **kwargs).arguments.get(subject)
            extra = {"function": func.__name__, "subject": target}
            func_logger.info(f"{func.__name__} started for {target}", extra=extra)
            started = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - started
                func_logger.warning(
                    f"{func.__name__} failed for {target} after {elapsed:.2f}s: "
                    f"{type(e).__name__}: {e}",
                    extra={
                        **extra,
                        "elapsed_s": elapsed,
                        "error_type": type(e).__name__,
                    },
                )
                raise

            elapsed = time.perf_counter() - started
            func_logger.info(
                f"{func.__name__} completed for {target} in {elapsed:.2f}s",
                extra={**extra, "elapsed_s": elapsed},
            )
            return result

        return wrapper

    return decorator


# Attempts made by retry_on_network_error before giving up
RETRY_ATTEMPTS = 3

# Standard retry for feed requests
retry_on_network_error = with_retry(
    max_attempts=RETRY_ATTEMPTS, min_wait=1.0, max_wait=10.0, multiplier=2.0
)
