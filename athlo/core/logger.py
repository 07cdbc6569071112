"""Logger configuration for ATHLO coaching services."""

import sys
from pathlib import Path

from loguru import logger

from athlo.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[component]}</magenta> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    json_logs: bool | None = None,
) -> None:
    """Configure loguru logger with console and optional file output.

    Every record carries an ``extra[component]`` field, "athlo" unless a
    caller binds its own (``logger.bind(component="coach")``).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to LOG_LEVEL.
        log_file: Optional path to log file. Defaults to LOG_FILE; if unset, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        json_logs: Write the file sink as JSON lines. Defaults to LOG_JSON.
    """
    level = level or settings.log_level
    log_file = log_file or settings.log_file
    json_logs = settings.log_json if json_logs is None else json_logs

    logger.remove()
    logger.configure(extra={"component": "athlo"})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=json_logs,
            backtrace=True,
            diagnose=not json_logs,
        )

    logger.debug(f"Logger initialized with level={level}, file={log_file}, json={json_logs}")
