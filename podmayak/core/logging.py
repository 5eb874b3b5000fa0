"""
Logging configuration for the API.

Every record, whether it comes from `logging.getLogger(__name__)` or a
structlog logger, goes through the same structlog processor chain. Context
bound with `structlog.contextvars` is merged into each line:

    request_id   bound by RequestLoggingMiddleware for the current request
    job_id       bound by GenerationJobRegistry inside a generation job
    job_kind     renovation or edit
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

from podmayak.core.config import settings

NOISY_LOGGERS = (
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "google_genai",
    "botocore",
    "sqlalchemy.engine",
)

# Applied to stdlib records and structlog events alike
SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_formatter(log_format: str, colors: bool = False) -> structlog.stdlib.ProcessorFormatter:
    """stdlib formatter rendering records as JSON lines or console text"""
    if log_format == "json":
        renderer_chain = [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        renderer_chain = [
            structlog.dev.ConsoleRenderer(colors=colors, exception_formatter=structlog.dev.plain_traceback),
        ]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer_chain],
    )


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5)  # 10MB
    handler.setLevel(level)
    handler.setFormatter(build_formatter("json"))
    return handler


def setup_logging():
    """Configure structlog and the root logger for the application."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(build_formatter(settings.log_format, colors=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    # JSON files in production, searchable by request_id and job_id
    if settings.environment == "production":
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        root_logger.addHandler(_rotating_handler(log_dir / "podmayak.log", logging.DEBUG))
        root_logger.addHandler(_rotating_handler(log_dir / "podmayak_errors.log", logging.ERROR))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": settings.log_level, "log_format": settings.log_format, "env": settings.environment},
    )
