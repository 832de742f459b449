"""covboard error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Project
- 6xxx: Run
- 7xxx: Results
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Project (3xxx)
    PROJECT_NOT_FOUND = 3001
    PROJECT_NOT_DIRECTORY = 3002
    PROJECT_NOT_GO = 3003

    # Run (6xxx)
    RUN_IN_PROGRESS = 6001
    DISCOVERY_FAILED = 6002

    # Results (7xxx)
    TARGET_NOT_FOUND = 7001
    REPORT_NOT_FOUND = 7002


@dataclass(frozen=True, slots=True)
class CovboardError(Exception):
    """Base error with structured context for dashboard responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROJECT_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovboardError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ProjectError(CovboardError):
    """Project validation errors. Raised before any state changes."""

    @classmethod
    def not_found(cls, path: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_NOT_FOUND,
            message=f"Path does not exist: {path}",
            details={"path": path},
        )

    @classmethod
    def not_directory(cls, path: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_NOT_DIRECTORY,
            message=f"Path is not a directory: {path}",
            details={"path": path},
        )

    @classmethod
    def not_go_project(cls, path: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_NOT_GO,
            message=(
                f"Directory does not appear to be a Go project "
                f"(no go.mod or *.go files found): {path}"
            ),
            details={"path": path},
        )


class RunError(CovboardError):
    """Errors that abort a whole test run."""

    @classmethod
    def in_progress(cls, run_id: str) -> "RunError":
        return cls(
            code=ErrorCode.RUN_IN_PROGRESS,
            message=f"A test run is already in progress: {run_id}",
            retryable=True,
            details={"run_id": run_id},
        )

    @classmethod
    def discovery_failed(cls, root: str, reason: str) -> "RunError":
        return cls(
            code=ErrorCode.DISCOVERY_FAILED,
            message=f"Failed to discover test packages in {root}: {reason}",
            details={"root": root, "reason": reason},
        )


class ResultsError(CovboardError):
    """Lookups against the current dashboard state."""

    @classmethod
    def target_not_found(cls, target_id: str) -> "ResultsError":
        return cls(
            code=ErrorCode.TARGET_NOT_FOUND,
            message=f"Package not found in current results: {target_id}",
            details={"target_id": target_id},
        )

    @classmethod
    def report_not_found(cls, handle: str) -> "ResultsError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"HTML coverage report not found: {handle}",
            details={"handle": handle},
        )
