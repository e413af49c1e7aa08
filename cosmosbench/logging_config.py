"""
Centralized logging configuration for cosmosbench.

This module provides a consistent logging setup for the benchmark scripts
with support for different environments and an optional log file.
"""

import logging
import logging.config
import os
import sys
from typing import Dict, Any, Optional


def get_log_level() -> str:
    """Get log level from environment variable or default to INFO."""
    return os.getenv("COSMOSBENCH_LOG_LEVEL", "INFO").upper()


def get_log_format() -> str:
    """Get log format based on environment."""
    env = os.getenv("COSMOSBENCH_ENV", "development").lower()

    if env == "production":
        # Structured format for production
        return "%(asctime)s | %(name)s | %(levelname)s | %(message)s | %(pathname)s:%(lineno)d"
    else:
        # Human-readable format for development
        return "%(asctime)s | %(name)-24s | %(levelname)-8s | %(message)s"


def get_logging_config(log_level: Optional[str] = None) -> Dict[str, Any]:
    """Get the logging configuration dictionary."""
    log_level = (log_level or get_log_level()).upper()
    log_format = get_log_format()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "cosmosbench": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            # The azure SDK logs every HTTP request at INFO
            "azure": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
            "urllib3": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }

    log_file = os.getenv("COSMOSBENCH_LOG_FILE")
    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
        }
        config["loggers"]["cosmosbench"]["handlers"].append("file")

    return config


def setup_logging(log_level: Optional[str] = None) -> None:
    """Setup logging configuration for the benchmark run."""
    config = get_logging_config(log_level)
    logging.config.dictConfig(config)

    logger = logging.getLogger("cosmosbench.logging")
    logger.debug("Logging configured with level: %s", config["loggers"]["cosmosbench"]["level"])

    if os.getenv("COSMOSBENCH_LOG_FILE"):
        logger.info("File logging enabled: %s", os.getenv("COSMOSBENCH_LOG_FILE"))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance inside the cosmosbench hierarchy
    """
    # Ensure the name starts with 'cosmosbench' for proper hierarchy
    if not name.startswith("cosmosbench"):
        if name == "__main__":
            name = "cosmosbench.main"
        else:
            name = f"cosmosbench.{name}"

    return logging.getLogger(name)
