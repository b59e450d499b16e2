"""Logging configuration shared by every Savourly bounded context.

structlog renders every record, including those emitted through stdlib
``logging`` by uvicorn, Protean and firebase-admin, so the API log reads as one
stream. Output is JSON in production/staging and coloured console lines
elsewhere.

Environment:
    LOG_LEVEL     overrides the per-environment default level
    LOG_DIR       directory for the rotating log files (default ``logs``)
    LOG_TO_FILE   ``0`` disables the log files; they are off under ``test``
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "google", "cachecontrol")

_MAX_LOG_BYTES = 10 * 1024 * 1024

_configured = False


def get_environment() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


@dataclass(frozen=True)
class LoggingSettings:
    environment: str
    level: str
    log_dir: Path
    to_file: bool

    @property
    def render_json(self) -> bool:
        return self.environment in ("production", "staging")

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        environment = get_environment()
        to_file_default = "0" if environment == "test" else "1"
        return cls(
            environment=environment,
            level=os.getenv("LOG_LEVEL", _LEVELS_BY_ENVIRONMENT.get(environment, "INFO")).upper(),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            to_file=os.getenv("LOG_TO_FILE", to_file_default) != "0",
        )


def _pre_chain() -> list:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(settings: LoggingSettings):
    if settings.render_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(settings: LoggingSettings) -> None:
    """Route stdlib records through structlog's renderer."""
    processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if settings.render_json:
        # The console renderer formats tracebacks itself
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(settings))

    formatter = structlog.stdlib.ProcessorFormatter(foreign_pre_chain=_pre_chain(), processors=processors)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.to_file:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(settings.log_dir / "savourly.log", settings.level))
        handlers.append(_rotating_handler(settings.log_dir / "savourly_error.log", logging.ERROR))

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(settings.level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_structlog(settings: LoggingSettings) -> None:
    processors = [structlog.stdlib.filter_by_level, *_pre_chain()]
    if settings.environment != "production":
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )
    processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure all logging for the application. Only the first call has an effect."""
    global _configured
    if _configured:
        return
    settings = settings or LoggingSettings.from_env()
    setup_stdlib_logging(settings)
    setup_structlog(settings)
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values into every log line emitted for the rest of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
