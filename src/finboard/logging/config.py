"""Logging setup shared by the Finboard CLI, HTTP API and Plaid connector.

Log records always go to stderr so that CLI commands can print JSON on stdout.
Access tokens are never logged; :func:`token_fingerprint` stands in for them.
"""

import hashlib
import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

SERVER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CLI_FORMAT = "%(message)s"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = {
    "urllib3": logging.WARNING,
    "plaid": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


@dataclass
class LoggingConfig:
    """Level and optional log file for a Finboard process."""

    level: str = "INFO"
    log_to_file: bool = False
    log_file_path: Path = Path("logs/finboard.log")
    max_file_size_mb: int = 50
    backup_count: int = 5

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        """Read LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH and the rotation limits."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_to_file=os.getenv("LOG_TO_FILE", "false").lower() == "true",
            log_file_path=Path(os.getenv("LOG_FILE_PATH", "logs/finboard.log")),
            max_file_size_mb=int(os.getenv("LOG_MAX_FILE_SIZE_MB", "50")),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )


def _file_handler(config: LoggingConfig) -> logging.Handler:
    config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.log_file_path,
        maxBytes=config.max_file_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
    )
    handler.setFormatter(logging.Formatter(SERVER_FORMAT))
    return handler


def setup_logging(
    config: LoggingConfig | None = None,
    cli_mode: bool = False,
    verbose: bool = False,
) -> None:
    """Configure the root logger for a CLI or server process.

    Called once from an entry point; any handlers already on the root logger
    are replaced.

    Args:
        config: Logging configuration. If None, loads from environment.
        cli_mode: If True, print bare messages instead of timestamped records
        verbose: If True, log at DEBUG regardless of the configured level
    """
    if config is None:
        config = LoggingConfig.from_environment()

    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.INFO)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CLI_FORMAT if cli_mode else SERVER_FORMAT))
    handlers: list[logging.Handler] = [console]
    if config.log_to_file:
        handlers.append(_file_handler(config))

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def token_fingerprint(access_token: str | None) -> str:
    """Return a short, non-reversible identifier for an access token.

    Args:
        access_token: Plaid access token (may be empty)

    Returns:
        str: First 12 hex characters of the token's SHA-256 digest
    """
    if not access_token:
        return "<none>"
    return hashlib.sha256(access_token.encode()).hexdigest()[:12]
