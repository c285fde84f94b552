"""Core modules for the MediGrid symptom engine."""

from medigrid.core.logging import ConsoleFormatter, JSONFormatter, get_logger, setup_logging

__all__ = [
    "ConsoleFormatter",
    "JSONFormatter",
    "get_logger",
    "setup_logging",
]
