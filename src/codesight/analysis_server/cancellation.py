"""Cooperative cancellation for long-running analysis requests."""

import threading
import time

from .errors import AnalysisTimeoutError


class CancellationToken:
    """
    Deadline plus an explicit cancel flag, checked at traversal yield points.

    Tokens are request-local. ``check()`` raises ``AnalysisTimeoutError`` once the
    deadline has passed or ``cancel()`` was called.
    """

    def __init__(self, timeout_ms: int | None = None, parent: "CancellationToken | None" = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout_ms / 1000.0 if timeout_ms is not None else None
        self._parent = parent
        self.timeout_ms = timeout_ms

    @classmethod
    def none(cls) -> "CancellationToken":
        """A token that never expires on its own."""
        return cls()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return self._parent is not None and self._parent.is_cancelled

    def check(self) -> None:
        """Raise if the request should stop."""
        if self.is_cancelled:
            if self._event.is_set():
                raise AnalysisTimeoutError("Operation canceled (external cancellation).")
            raise AnalysisTimeoutError(
                f"Operation canceled (timeout after {self.timeout_ms} ms or external cancellation).",
                timeout_ms=self.timeout_ms,
            )
