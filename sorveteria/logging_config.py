import logging
from pathlib import Path

import structlog
from opentelemetry import trace
from rich.logging import RichHandler

from .config import settings

LOG_DIR = Path("logs")
LOG_FILE = "sorveteria.log"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# Libraries whose chatter is capped; request lines come from our middleware
QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
}


def setup_logging(log_level: str | None = None) -> None:
    """Configure stdlib logging (Rich console, optional file) and structlog.

    Args:
        log_level: Level name overriding the debug-based default
    """
    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.DEBUG if settings.debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in _build_handlers():
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    _configure_structlog(level)

    get_logger(__name__).info(
        "Logging configured",
        level=logging.getLevelName(level),
        timezone=settings.timezone,
    )


def _build_handlers() -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = RichHandler(
        rich_tracebacks=True,
        show_path=settings.debug,
        show_time=False,  # time comes from the formatter
    )
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if settings.is_production or settings.log_to_file:
        LOG_DIR.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / LOG_FILE, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def _add_trace_context(logger, method_name, event_dict):
    """Attach the current OpenTelemetry trace and span ids, if any."""
    span = trace.get_current_span()
    if not span.is_recording():
        return event_dict

    context = span.get_span_context()
    if context.is_valid:
        event_dict["trace_id"] = f"0x{context.trace_id:032x}"
        event_dict["span_id"] = f"0x{context.span_id:016x}"
    return event_dict


def _configure_structlog(level: int = logging.INFO) -> None:
    if settings.debug:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            _add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(max(level, logging.INFO)),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
