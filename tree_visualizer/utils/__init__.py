"""
Utility modules for the syntax tree visualizer.
"""

from tree_visualizer.utils.logging import (
    get_logger,
    setup_logging,
    LogContext,
    log_parse_request,
    log_request,
    log_error_with_context,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_parse_request",
    "log_request",
    "log_error_with_context",
]
