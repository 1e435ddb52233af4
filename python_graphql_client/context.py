"""Cancellation tokens passed to ``Client.run``.

A ``Context`` is either cancelled explicitly with ``cancel()`` or expires when
its deadline passes. Children created with ``with_cancel``/``with_timeout``
are cancelled together with their parent and never outlive its deadline::

    with Context.background().with_timeout(5) as ctx:
        client.run(request, response, ctx=ctx)
"""
import threading
import time

from typing import Callable, List, Optional

from .errors import CancellationError, DeadlineExceededError


class Context:
    def __init__(self, deadline: Optional[float] = None, parent: Optional["Context"] = None):
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []
        self.deadline = deadline
        if parent is not None:
            if parent.deadline is not None and (self.deadline is None or parent.deadline < self.deadline):
                self.deadline = parent.deadline
            parent.add_cancel_callback(self.cancel)

    @classmethod
    def background(cls) -> "Context":
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> "Context":
        return Context(deadline=time.monotonic() + seconds, parent=self)

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_cancel_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` once ``cancel()`` is called.

        Runs immediately if the context is already cancelled. Returns a
        function removing the callback again.
        """
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)
        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def remaining(self) -> Optional[float]:
        "seconds left before the deadline, None without deadline"
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def done(self) -> bool:
        return self.err() is not None

    def err(self) -> Optional[CancellationError]:
        if self._cancelled:
            return CancellationError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceededError()
        return None

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *_, **__):  # type: ignore
        self.cancel()
