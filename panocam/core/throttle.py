#!/usr/bin/env python3
"""Leading-edge call throttling."""

import functools
import time
from typing import Any, Callable, Optional


def throttle(func: Callable[..., Any], limit_ms: float,
             clock: Callable[[], float] = time.monotonic) -> Callable[..., Optional[Any]]:
    """
    Throttle calls to func so at most one runs per limit_ms window.

    The first call after the window re-opens runs func immediately and returns
    its result, which may be a coroutine the caller is expected to await.
    Calls made while throttled are dropped and return None; there is no
    trailing call. The window is measured from the start of each accepted
    call, not its completion.

    Args:
        func: Function to throttle
        limit_ms: Minimum interval between accepted calls, in milliseconds
        clock: Monotonic clock returning seconds

    Returns:
        Throttled function
    """
    limit = limit_ms / 1000.0
    last_accepted: Optional[float] = None

    @functools.wraps(func)
    def throttled(*args, **kwargs):
        nonlocal last_accepted
        now = clock()
        if last_accepted is not None and now - last_accepted < limit:
            return None
        last_accepted = now
        return func(*args, **kwargs)

    return throttled
