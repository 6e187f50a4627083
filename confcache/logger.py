import logging
import re
from typing import Any

import structlog
from structlog.types import EventDict, Processor


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Some servers log the message a second time in the extra `color_message`.
    This processor drops the key from the event dict if it exists.
    """
    event_dict.pop("color_message", None)
    return event_dict


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the confcache package"""

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
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
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

    # A repeated call swaps the formatter on the handler it installed before
    root_logger = logging.getLogger()
    installed = [
        handler for handler in root_logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    if installed:
        for handler in installed:
            handler.setFormatter(formatter)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root_logger.handlers.clear()
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class ConfCacheStructLogger:
    """
    Structured logger for the confcache package.

    Values passed to `bind` stay attached to the returned logger only;
    `bind_context` puts values on the context variables so that every log
    line emitted from the current context carries them.
    """

    def __init__(self, log_name: str = "confcache", logger=None, **initial_values: Any):
        self.log_name = log_name
        if logger is None:
            # stays lazy until first use, so later setup_logging calls still apply
            logger = structlog.stdlib.get_logger(log_name, **initial_values)
        self.logger = logger

    @staticmethod
    def _to_snake_case(name):
        """Convert CamelCase to snake_case"""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()

    def bind(self, **new_values: Any) -> "ConfCacheStructLogger":
        """Return a child logger carrying `new_values` on every event."""
        return ConfCacheStructLogger(self.log_name, self.logger.bind(**new_values))

    def bind_context(self, *args, **new_values: Any):
        """
        Bind values to the logger context.

        Args:
            *args: Objects that have a 'name' attribute (keyed by their snake_case type name)
            **new_values: Key-value pairs to bind to the context
        """
        for arg in args:
            if hasattr(arg, 'name'):
                key = self._to_snake_case(type(arg).__name__)
                structlog.contextvars.bind_contextvars(**{key: arg.name})
            else:
                self.logger.error(
                    "Unsupported argument when trying to log.",
                    invalid_argument=type(arg).__name__
                )

        structlog.contextvars.bind_contextvars(**new_values)

    @staticmethod
    def unbind(*keys: str):
        """Unbind keys from the logger context"""
        structlog.contextvars.unbind_contextvars(*keys)

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


def get_confcache_logger(log_name: str = "confcache", **initial_values: Any) -> ConfCacheStructLogger:
    """Return the package logger, optionally carrying `initial_values` on every event."""
    return ConfCacheStructLogger(log_name, **initial_values)


def init_logger(settings):
    """
    Initialize the structured logger for the confcache package.

    Args:
        settings: RegistrySettings with `log_level` and `json_logs`

    Returns:
        ConfCacheStructLogger: Configured structured logger instance
    """
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    return ConfCacheStructLogger("confcache")
