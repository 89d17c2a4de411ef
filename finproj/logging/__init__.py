"""
Logging configuration and utilities for the projection engine.
"""
from .config import configure_logging, get_calculation_logger, get_logger, log_calculation

__all__ = ["configure_logging", "get_logger", "get_calculation_logger", "log_calculation"]
