"""In-memory circuit breaker guarding calls to the hotel directory service."""

from __future__ import annotations

import time
from typing import Callable, Literal

CircuitState = Literal["closed", "open"]


class CircuitBreaker:
    """Open after consecutive failures; close again once the recovery window elapses."""

    def __init__(
        self,
        name: str = "default",
        *,
        failure_threshold: int = 3,
        recovery_seconds: float = 60.0,
        time_fn: Callable[[], float] | None = None,
    ):
        if failure_threshold <= 0:
            raise ValueError("failure_threshold must be > 0")
        if recovery_seconds <= 0:
            raise ValueError("recovery_seconds must be > 0")

        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_seconds = recovery_seconds
        self._time_fn = time_fn or time.monotonic
        self._consecutive_failures = 0
        self._opened_until: float | None = None

    @property
    def state(self) -> CircuitState:
        return "open" if self.is_open() else "closed"

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    def is_open(self) -> bool:
        opened_until = self._opened_until
        if opened_until is None:
            return False

        if self._time_fn() >= opened_until:
            self.record_success()
            return False
        return True

    def record_success(self) -> None:
        self._consecutive_failures = 0
        self._opened_until = None

    def record_failure(self) -> None:
        """Count a failed call; (re)open the breaker when the threshold is reached."""
        self._consecutive_failures += 1
        if self._consecutive_failures >= self.failure_threshold:
            self._opened_until = self._time_fn() + self.recovery_seconds

    def seconds_until_close(self) -> float:
        if self._opened_until is None:
            return 0.0
        return max(self._opened_until - self._time_fn(), 0.0)
