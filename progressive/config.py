"""
Configuration for the Progressive Rates Engine.

Settings are read from environment variables:

- PROGRESSIVE_NEGATIVE_INPUT: 'clamp' (default) treats a negative input as
  zero, 'reject' raises InvalidInput.
- PROGRESSIVE_LOG_LEVEL: level name for the 'progressive' logger (default WARNING).
"""

import logging
import os
from dataclasses import dataclass

NEGATIVE_INPUT_CLAMP = "clamp"
NEGATIVE_INPUT_REJECT = "reject"
NEGATIVE_INPUT_POLICIES = (NEGATIVE_INPUT_CLAMP, NEGATIVE_INPUT_REJECT)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime options for calculators."""

    negative_input: str = NEGATIVE_INPUT_CLAMP
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.negative_input not in NEGATIVE_INPUT_POLICIES:
            raise ValueError(
                f"Invalid negative_input policy: {self.negative_input}. "
                f"Must be one of {', '.join(NEGATIVE_INPUT_POLICIES)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            negative_input=os.environ.get("PROGRESSIVE_NEGATIVE_INPUT", NEGATIVE_INPUT_CLAMP).lower(),
            log_level=os.environ.get("PROGRESSIVE_LOG_LEVEL", "WARNING").upper(),
        )

    @classmethod
    def calculation_from_env(cls) -> "Settings":
        """Settings for calculators: only the negative input policy is read from the environment."""
        return cls(
            negative_input=os.environ.get("PROGRESSIVE_NEGATIVE_INPUT", NEGATIVE_INPUT_CLAMP).lower(),
        )


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    settings = settings or Settings.from_env()
    logger = logging.getLogger("progressive")
    logger.setLevel(settings.log_level)
    return logger
