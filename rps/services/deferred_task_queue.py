"""
Deferred Task Queue

Continuations scheduled by an event handler and run after the handler has
returned, in FIFO order. Messages emitted by the handler are handed to the
transport before any deferred work emits its own.
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Tuple

logger = logging.getLogger(__name__)


class DeferredTaskQueue:
    """FIFO of callables drained once per dispatched event."""

    def __init__(self):
        self._tasks: Deque[Tuple[Callable, tuple, dict]] = deque()

    def defer(self, task: Callable, *args: Any, **kwargs: Any) -> None:
        """Schedule a task for the next drain."""
        self._tasks.append((task, args, kwargs))
        logger.debug(f"Deferred {getattr(task, '__name__', repr(task))}")

    def drain(self) -> int:
        """
        Run every queued task, including ones queued while draining.

        A failing task is logged and does not stop the rest.

        Returns:
            Number of tasks run
        """
        ran = 0
        while self._tasks:
            task, args, kwargs = self._tasks.popleft()
            ran += 1
            try:
                task(*args, **kwargs)
            except Exception as e:
                logger.error(f"Deferred task {getattr(task, '__name__', repr(task))} failed: {e}", exc_info=True)
        return ran

    def pending(self) -> int:
        return len(self._tasks)

    def clear(self) -> None:
        self._tasks.clear()
