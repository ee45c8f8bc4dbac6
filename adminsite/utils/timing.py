"""Debounce/throttle for callbacks scheduled on an asyncio event loop."""

import asyncio
import functools
import time
from typing import Any, Callable, Optional


def debounce(wait: float) -> Callable:
    """Delay calls until ``wait`` seconds pass without another call.

    Only the most recent call's arguments are used. Must be called from a
    running event loop.
    """
    def decorator(func: Callable) -> Callable:
        handle: Optional[asyncio.TimerHandle] = None

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> None:
            nonlocal handle
            if handle is not None:
                handle.cancel()
            loop = asyncio.get_running_loop()
            handle = loop.call_later(wait, lambda: func(*args, **kwargs))

        def cancel() -> None:
            nonlocal handle
            if handle is not None:
                handle.cancel()
                handle = None

        wrapper.cancel = cancel
        return wrapper
    return decorator


def throttle(wait: float, clock: Callable[[], float] = time.monotonic) -> Callable:
    """Run at most one call per ``wait`` seconds; extra calls are dropped."""
    def decorator(func: Callable) -> Callable:
        last_call: Optional[float] = None

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            nonlocal last_call
            now = clock()
            if last_call is not None and now - last_call < wait:
                return None
            last_call = now
            return func(*args, **kwargs)
        return wrapper
    return decorator
