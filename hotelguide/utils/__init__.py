"""Shared utility helpers."""

from hotelguide.utils.circuit_breaker import CircuitBreaker
from hotelguide.utils.retry import is_transient_error, retry_async, retry_in_thread

__all__ = [
    "CircuitBreaker",
    "is_transient_error",
    "retry_async",
    "retry_in_thread",
]
