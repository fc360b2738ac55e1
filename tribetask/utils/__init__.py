"""Utilidades de TribeTask."""

from tribetask.utils.errors import (
    TribeTaskError,
    NotFoundError,
    ValidationError,
    PersistenceError,
    ErrorCategory,
    ErrorContext,
    log_error,
)
from tribetask.utils.latency import LatencySimulator, simulated_latency

__all__ = [
    # Errors
    "TribeTaskError",
    "NotFoundError",
    "ValidationError",
    "PersistenceError",
    "ErrorCategory",
    "ErrorContext",
    "log_error",
    # Latency
    "LatencySimulator",
    "simulated_latency",
]
