"""Fire-and-forget execution of best-effort work

Work submitted here runs on a small module-level thread pool after the handler
has built its response. Callers get a Future back but never wait on it.

NOTE: tasks still pending when the Lambda execution environment is frozen
      resume on the next invocation or are lost with the environment. Only
      submit work whose loss is acceptable.

Functions:
    fire_and_forget(fn, /, *args, **kwargs) -> Future
        Submit `fn(*args, **kwargs)` for background execution.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from collections.abc import Callable
from typing import Any


logger = logging.getLogger(__name__)

MAX_WORKERS = 4

_executor = ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix='snipurl-background')


def _log_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error('Background task failed.', exc_info=(type(exc), exc, exc.__traceback__))


def fire_and_forget(fn: Callable[..., Any], /, *args, **kwargs) -> Future:
    """Run `fn(*args, **kwargs)` in the background and return immediately.

    Exceptions raised by `fn` are logged, never propagated to the submitter.

    Example:
        >>> future = fire_and_forget(record_click, dao, 'abc123', 41)
        >>> # the handler returns without waiting on `future`
    """
    future = _executor.submit(fn, *args, **kwargs)
    future.add_done_callback(_log_failure)
    return future
