"""Logging configuration for kubectl_lite."""

from kubectl_lite.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
