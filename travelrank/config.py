"""
Ranking Engine Configuration
Loads settings from environment variables
"""

import os
import sys

from dotenv import load_dotenv
from loguru import logger

# Load environment variables
load_dotenv()


class Settings:
    """Engine settings loaded from environment"""

    # Logging
    LOG_LEVEL: str = os.getenv("TRAVELRANK_LOG_LEVEL", "INFO")

    # Per-candidate fan-out
    MAX_WORKERS: int = int(os.getenv("TRAVELRANK_MAX_WORKERS", "4"))
    PARALLEL_THRESHOLD: int = int(os.getenv("TRAVELRANK_PARALLEL_THRESHOLD", "32"))

    # Default budget sub-profile
    DEFAULT_CURRENCY: str = os.getenv("TRAVELRANK_DEFAULT_CURRENCY", "USD")

    @property
    def parallel_enabled(self) -> bool:
        """Whether the thread pool is used at all"""
        return self.MAX_WORKERS > 1


def configure_logging(level: str = None) -> None:
    """
    Replace loguru's default sink with a stderr sink at the configured level

    Args:
        level: Log level name (default: settings.LOG_LEVEL)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} - {message}",
    )


# Global settings instance
settings = Settings()
