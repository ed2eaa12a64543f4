"""Logging configuration for semaphore_client."""

from semaphore_client.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
