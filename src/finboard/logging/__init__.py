"""Centralized logging configuration for Finboard.

Standard usage:
    ```python
    import logging
    from finboard.logging import setup_logging

    # Configure once at application startup
    setup_logging()

    # Get loggers in each module
    logger = logging.getLogger(__name__)
    ```
"""

from .config import LoggingConfig, setup_logging, token_fingerprint

__all__ = ["LoggingConfig", "setup_logging", "token_fingerprint"]
