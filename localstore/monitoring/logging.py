"""
Structured Logging - Monitoring Layer

Provides structured logging for the file store with:
- JSON formatting for log aggregation
- Operation context injection (operation name, store name)
- Configurable log levels per module

@.architecture
Incoming: data/storage/local.py, config/settings.py, All modules via get_logger() --- {str log_level, str format_type, Dict[str, str] module_levels, str operation/store}
Processing: configure_logging(), JSONFormatter.format(), set_operation_context(), StructuredLogger._log_with_context() --- {4 jobs: context_injection, formatting, log_configuration, structured_logging}
Outgoing: sys.stdout, Log files, All modules --- {StructuredLogger instances, JSON formatted logs, context variables}
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

# Context variables for the operation being executed
operation_ctx: ContextVar[Optional[str]] = ContextVar('operation', default=None)
store_ctx: ContextVar[Optional[str]] = ContextVar('store', default=None)


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs one JSON object per record for log aggregation systems.
    """

    def __init__(
        self,
        include_traceback: bool = True,
        include_context: bool = True
    ):
        """
        Initialize JSON formatter.

        Args:
            include_traceback: Include exception traceback in output
            include_context: Include context variables (operation, store)
        """
        super().__init__()
        self.include_traceback = include_traceback
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if self.include_context:
            operation = operation_ctx.get()
            store = store_ctx.get()

            if operation:
                log_data['operation'] = operation
            if store:
                log_data['store'] = store

        if record.exc_info and self.include_traceback:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'extra_fields'):
            log_data['extra'] = record.extra_fields

        return json.dumps(log_data, default=str)


class ContextFilter(logging.Filter):
    """
    Logging filter that adds context variables to log records.

    Used by the text formatter, which references %(operation)s and %(store)s.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.operation = operation_ctx.get() or '-'
        record.store = store_ctx.get() or '-'
        return True


class StructuredLogger:
    """
    Wrapper for Python logger with structured logging support.

    Keyword arguments passed to the log methods end up under ``extra``
    in JSON output.
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (usually module name)
        """
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log_with_context(
        self,
        level: int,
        message: str,
        **kwargs: Any
    ) -> None:
        extra = {'extra_fields': kwargs} if kwargs else {}
        self._logger.log(level, message, extra=extra, stacklevel=3)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with context."""
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with context."""
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with context."""
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with context."""
        self._log_with_context(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(
            message,
            extra={'extra_fields': kwargs} if kwargs else {},
            stacklevel=2
        )


def configure_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_file: Optional[Path] = None,
    enable_console: bool = True,
    module_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ("json" or "text")
        log_file: Optional file path for log output
        enable_console: Enable console (stdout) logging
        module_levels: Per-module log levels (e.g. {"localstore.security": "WARNING"})
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-30s | [%(store)s:%(operation)s] | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(ContextFilter())
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(ContextFilter())
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    for handler in handlers:
        root_logger.addHandler(handler)

    if module_levels:
        for module_name, module_level in module_levels.items():
            module_log_level = getattr(logging, module_level.upper(), logging.INFO)
            logging.getLogger(module_name).setLevel(module_log_level)

    logging.getLogger('asyncio').setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger for module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)


def set_operation_context(
    operation: Optional[str] = None,
    store: Optional[str] = None
) -> None:
    """
    Set context variables for the current operation.

    Args:
        operation: Operation name (create, delete, ...)
        store: Destination directory name of the store
    """
    if operation:
        operation_ctx.set(operation)
    if store:
        store_ctx.set(store)


def clear_operation_context() -> None:
    """Clear all context variables."""
    operation_ctx.set(None)
    store_ctx.set(None)


def get_operation() -> Optional[str]:
    """Get current operation name from context."""
    return operation_ctx.get()


# Default configuration presets
LOGGING_PRESETS = {
    'development': {
        'level': 'DEBUG',
        'format_type': 'text',
        'enable_console': True,
    },
    'production': {
        'level': 'INFO',
        'format_type': 'json',
        'enable_console': True,
    },
    'testing': {
        'level': 'WARNING',
        'format_type': 'text',
        'enable_console': True,
    }
}


def configure_from_preset(preset: str = 'development', **overrides: Any) -> None:
    """
    Configure logging from preset.

    Args:
        preset: Preset name ('development', 'production', or 'testing')
        **overrides: Override preset values
    """
    if preset not in LOGGING_PRESETS:
        raise ValueError(f"Unknown preset: {preset}. Available: {list(LOGGING_PRESETS.keys())}")

    config = LOGGING_PRESETS[preset].copy()
    config.update(overrides)

    configure_logging(**config)
