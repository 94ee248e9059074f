"""
Core utilities package for Sheets Synapsis.

This package provides environment loading and logging setup.
"""

from .config import (
    LOG_FORMAT,
    configure_logging,
    load_environment,
)

__all__ = [
    "LOG_FORMAT",
    "configure_logging",
    "load_environment",
]
