"""Structured logging module for cqlpolicy.

Provides configurable logging with JSON format support and file rotation.
Includes resolution context support so records emitted while resolving an
expression carry the policy family and expression text.
"""

from cqlpolicy.logging.config import configure_logging
from cqlpolicy.logging.context import (
    ResolutionContextFilter,
    clear_resolution_context,
    get_resolution_context,
    resolution_context,
    set_resolution_context,
)
from cqlpolicy.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ResolutionContextFilter",
    "clear_resolution_context",
    "configure_logging",
    "get_resolution_context",
    "resolution_context",
    "set_resolution_context",
]
