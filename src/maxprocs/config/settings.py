"""
Package settings and logging configuration.

Values come from the environment, with a .env file in the working directory
loaded first. Cgroup file locations are fixed and deliberately not settable here.
"""
import logging
import os
from typing import Optional
from dotenv import load_dotenv

from maxprocs.exceptions import ConfigurationError

# Load environment variables
load_dotenv()

PACKAGE_LOGGER = "maxprocs"


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Parse an integer environment variable.

    Args:
        name: Environment variable name
        default: Value when the variable is unset or blank

    Returns:
        Parsed integer, or default

    Raises:
        ConfigurationError: If the variable is set but not an integer
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            variable=name,
        )


def log_level() -> int:
    """Resolve MAXPROCS_LOG_LEVEL to a logging level number."""
    name = os.getenv("MAXPROCS_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"MAXPROCS_LOG_LEVEL must be a logging level name, got {name!r}",
            variable="MAXPROCS_LOG_LEVEL",
        )
    return level


def configure_logging() -> logging.Logger:
    """Apply MAXPROCS_LOG_LEVEL to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level())
    return logger


# Worker sizing (read on each call so tests and long-lived processes see changes)
DEFAULT_MAX_WORKERS = 64


def workers_override() -> Optional[int]:
    return _env_int("MAXPROCS_WORKERS")


def max_workers() -> int:
    return _env_int("MAXPROCS_MAX_WORKERS", DEFAULT_MAX_WORKERS)


def memory_per_worker_mb() -> int:
    return _env_int("MAXPROCS_MEMORY_PER_WORKER_MB", 0)


def reserved_memory_mb() -> int:
    return _env_int("MAXPROCS_RESERVED_MEMORY_MB", 0)
