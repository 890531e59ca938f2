"""
Monitoring Layer - Logging and metrics for the file store

- Structured logging (JSON formatting, operation context injection)
- Metrics collection (Prometheus-compatible counters and histograms)
"""

# Logging
from .logging import (
    JSONFormatter,
    ContextFilter,
    StructuredLogger,
    configure_logging,
    configure_from_preset,
    get_logger,
    set_operation_context,
    clear_operation_context,
    get_operation,
    LOGGING_PRESETS,
)

# Metrics
from .metrics import (
    Counter,
    Histogram,
    MetricsRegistry,
    get_registry,
    setup_store_metrics,
)

__all__ = [
    "JSONFormatter",
    "ContextFilter",
    "StructuredLogger",
    "configure_logging",
    "configure_from_preset",
    "get_logger",
    "set_operation_context",
    "clear_operation_context",
    "get_operation",
    "LOGGING_PRESETS",
    "Counter",
    "Histogram",
    "MetricsRegistry",
    "get_registry",
    "setup_store_metrics",
]
