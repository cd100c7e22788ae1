"""
Logging setup for formrules.

Every module logs through ``get_logger(__name__)``. Records go to stderr,
as JSON by default or as plain text when FORMRULES_LOG_FORMAT=text.
"""
import logging
import sys
import time

from pythonjsonlogger import jsonlogger

from formrules.config import get_config

DEFAULT_LOGGER_NAME = "formrules"

JSON_FIELDS = "%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(funcName)s] %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that stamps each record with where it came from.

    Extra keys passed via ``extra=`` (form, table, operation, ...) are
    kept as top-level fields.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        # fmt keys that are not record attributes arrive as None
        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return CustomJsonFormatter(fmt=JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _resolve_level(level: str | None) -> int:
    name = (level or get_config().log_level).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    (Re)configure a logger with a single stderr handler.

    Args:
        name: Logger name
        level: Level name; defaults to EngineConfig.log_level
        format_type: "json" or "text"; defaults to EngineConfig.log_format

    Returns:
        The configured logger
    """
    log_level = _resolve_level(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(_build_formatter(format_type or get_config().log_format))

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return ``name``'s logger, configuring it on first use."""
    logger = logging.getLogger(name)
    return logger if logger.handlers else setup_logger(name)


class log_operation:
    """
    Time a block and log its outcome.

    Start and success are logged at DEBUG; a failure is logged at ERROR
    with the exception type and re-raised.

    Usage:
        with log_operation("Validating input", logger=logger, form="create_task") as op:
            session.passes()
        op.duration  # seconds
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: float | None = None
        self.duration: float | None = None

    def _extra(self, **fields) -> dict:
        return {"operation": self.operation_name, **fields, **self.extra_fields}

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting: {self.operation_name}", extra=self._extra())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        elapsed = round(self.duration, 6)

        if exc_type is None:
            self.logger.debug(
                f"Completed: {self.operation_name}",
                extra=self._extra(duration_seconds=elapsed, status="success"),
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra=self._extra(
                    duration_seconds=elapsed,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
            )
        return False
