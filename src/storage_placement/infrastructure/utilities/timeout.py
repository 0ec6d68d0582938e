"""Run blocking calls with a deadline."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, TypeVar

from storage_placement.domain.base.exceptions import ProviderTimeoutError

T = TypeVar("T")


def call_with_timeout(func: Callable[[], T], timeout: float, operation: str) -> T:
    """
    Run func in a worker thread and wait at most timeout seconds.

    The worker is abandoned, not killed, when the deadline passes; this is only
    used for calls such as DNS lookups that cannot take a timeout themselves.

    Raises:
        ProviderTimeoutError: If func does not finish in time
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="placement-timeout")
    try:
        future = executor.submit(func)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as e:
            raise ProviderTimeoutError(operation, timeout) from e
    finally:
        executor.shutdown(wait=False)
