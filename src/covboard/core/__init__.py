"""Core module exports."""

from covboard.core.errors import (
    ConfigError,
    CovboardError,
    ErrorCode,
    ProjectError,
    ResultsError,
    RunError,
)
from covboard.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "CovboardError",
    "ConfigError",
    "ErrorCode",
    "ProjectError",
    "ResultsError",
    "RunError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
