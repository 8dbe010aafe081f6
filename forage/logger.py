import logging
import os
from typing import Any

import structlog
from structlog.types import EventDict, Processor


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Some host servers log the message a second time in the extra `color_message`,
    which we don't need. This processor drops the key from the event dict if it exists.
    """
    event_dict.pop("color_message", None)
    return event_dict


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the forage package"""

    # An embedding application may already have configured structlog
    if structlog.is_configured():
        return

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if (isinstance(handler, logging.StreamHandler) and
            isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
            return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        drop_color_message_key,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Only JSON logs need the exception pre-formatted, the console
        # renderer pretty-prints it on its own
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class ForageStructLogger:
    """
    Structured logger for the forage package.

    `bind` returns a new logger carrying the bound values on every event.
    """

    def __init__(self, log_name: str = "forage", logger=None):
        self.log_name = log_name
        self.logger = logger if logger is not None else structlog.stdlib.get_logger(log_name)

    def bind(self, **new_values: Any) -> "ForageStructLogger":
        return ForageStructLogger(self.log_name, self.logger.bind(**new_values))

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **kw)

    def warning(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.warning(event, *args, **kw)

    warn = warning

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **kw)

    def critical(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.critical(event, *args, **kw)

    def exception(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.exception(event, *args, **kw)


def get_forage_logger(log_name: str = "forage") -> ForageStructLogger:
    """Return a structured logger; call `.bind(component=...)` on it to tag events."""
    return ForageStructLogger(log_name)


def init_logger(log_level: str | None = None, json_logs: bool | None = None):
    """
    Initialize the structured logger for the forage package.

    Args:
        log_level: Logging level, defaults to FORAGE_LOG_LEVEL or INFO
        json_logs: Render JSON instead of console output, defaults to FORAGE_LOG_JSON

    Returns:
        ForageStructLogger: Configured structured logger instance
    """
    if log_level is None:
        log_level = os.getenv("FORAGE_LOG_LEVEL", "INFO")
    if json_logs is None:
        json_logs = os.getenv("FORAGE_LOG_JSON", "false").lower() == "true"

    setup_logging(json_logs=json_logs, log_level=log_level)

    return ForageStructLogger("forage")
