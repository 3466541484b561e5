"""Observability: logging setup, correlation ids, request middleware."""

from fluxori.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from fluxori.observability.logger import CorrelationIdFilter, configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "CorrelationIdFilter",
    "get_correlation_id",
    "set_correlation_id",
]
