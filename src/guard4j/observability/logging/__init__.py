"""Observability – structlog configuration and logger lookup."""
from guard4j.observability.logging.factory import JsonLoggerFactory
from guard4j.observability.logging.loggers import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
