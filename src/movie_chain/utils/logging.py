# ABOUTME: Structured logging configuration using loguru for game sessions.
# ABOUTME: Supports context fields (phase, chain_length, operation) and file/console output.

import sys
from pathlib import Path
from typing import Any

from loguru import logger


# Default log format with structured context
DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> | "
    "{extra}"
)

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
    format_string: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip"
) -> None:
    """
    Configure loguru for structured logging.

    Usage:
        >>> setup_logging(log_level="DEBUG", log_dir="logs")
        >>> from loguru import logger
        >>> logger.bind(phase="in_progress").info("Step accepted")

    Args:
        log_level: Minimum log level ("DEBUG", "INFO", "WARNING", "ERROR")
        log_dir: Directory for log files (default: "logs")
        console_output: Enable console logging (default: True)
        file_output: Enable file logging (default: True)
        format_string: Custom format string (default: structured format)
        rotation: When to rotate log files (default: "10 MB")
        retention: How long to keep old logs (default: "7 days")
        compression: Compression for rotated logs (default: "zip")

    Raises:
        ValueError: If log_level is invalid
    """
    log_level = log_level.upper()
    if log_level not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: '{log_level}'. "
            f"Must be one of: {', '.join(sorted(VALID_LEVELS))}"
        )

    # Remove default handler
    logger.remove()

    fmt = format_string or DEFAULT_FORMAT

    if console_output:
        logger.add(
            sys.stderr,
            format=fmt,
            level=log_level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if file_output:
        log_dir = Path("logs") if log_dir is None else Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / "movie_chain_{time:YYYY-MM-DD}.log"
        logger.add(
            str(log_file),
            format=fmt,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            backtrace=True,
            diagnose=False,
            enqueue=True,  # Thread-safe
        )

    logger.info(
        f"Logging configured: level={log_level}, "
        f"console={console_output}, file={file_output}"
    )


def log_game_event(
    message: str,
    phase: str,
    chain_length: int,
    level: str = "INFO",
    **extra_context: Any
) -> None:
    """
    Log a game lifecycle event with the standard context fields.

    Usage:
        >>> log_game_event(
        ...     "Step accepted",
        ...     phase="in_progress",
        ...     chain_length=3,
        ...     film_id=10
        ... )

    Args:
        message: Log message
        phase: Game phase after the event
        chain_length: Number of steps in the chain after the event
        level: Log level (default: "INFO")
        **extra_context: Additional context fields
    """
    bound_logger = logger.bind(phase=phase, chain_length=chain_length, **extra_context)
    bound_logger.log(_normalize_level(level), message)


def log_remote_call(
    operation: str,
    status: str,
    duration_ms: float | None = None,
    **extra_context: Any
) -> None:
    """
    Log the outcome of one authority request.

    Failures are logged at WARNING so they show up without DEBUG enabled.

    Args:
        operation: Remote operation ("start_game", "validate_step", "search_people", ...)
        status: "ok" or a short failure description
        duration_ms: Optional round trip time in milliseconds
        **extra_context: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation, "status": status, **extra_context}
    if duration_ms is not None:
        context["duration_ms"] = round(duration_ms, 1)

    level = "DEBUG" if status == "ok" else "WARNING"
    logger.bind(**context).log(level, f"Remote call {operation}: {status}")


def _normalize_level(level: str) -> str:
    level = level.upper()
    return level if level in VALID_LEVELS else "INFO"
