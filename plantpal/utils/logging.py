"""
Logging utilities for the PlantPal backend.

Provides standardized logger configuration.

LOGGING RULES:
- NEVER log API keys (default or user-supplied)
- NEVER log generated image payloads or data URIs
- NEVER log full prompts (log the length instead)

Acceptable logging:
- Pipeline events (e.g., "Trying model gemini-2.5-flash (1/3)")
- Per-model failure classification and sanitized error messages
- Counts (plants parsed, images generated)
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from plantpal.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Pipeline started")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def mask_secret(value: Optional[str]) -> str:
    """Render a secret as a short, non-reversible hint for log lines."""
    if not value:
        return "<none>"
    if len(value) <= 8:
        return "****"
    return f"****{value[-4:]}"
