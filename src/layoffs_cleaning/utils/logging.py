"""
Structured logging for cleaning runs.

Log lines go to stderr so that Rich tables printed by the CLI on
stdout stay readable when both are shown in a terminal.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from layoffs_cleaning.config.settings import LoggingConfig

# pandas and pandera chatter below this level is not useful in run logs
THIRD_PARTY_LEVEL = logging.WARNING


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog for a cleaning run.

    Args:
        level: Minimum level name, case-insensitive.
        json_output: Emit one JSON object per line instead of console text.
        stream: Where log lines go. Defaults to stderr.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    stream = stream or sys.stderr

    logging.getLogger().setLevel(THIRD_PARTY_LEVEL)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=json_output),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=stream.isatty())
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def configure_from_config(config: "LoggingConfig", stream: TextIO | None = None) -> None:
    """Apply the logging section of a cleaning config."""
    configure_logging(config.level, config.json_output, stream)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key/value pairs to every log line emitted inside the block.

    The pipeline binds the project and source path for a whole run,
    and the step name around each cleaning step:

        with log_context(step="deduplicate"):
            log.info("Removed duplicate rows", n_dropped=1)
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
