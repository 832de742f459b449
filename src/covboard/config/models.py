"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVBOARD__SECTION__KEY)
3. Repo YAML (.covboard/config.yaml)
4. Global YAML (~/.config/covboard/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVBOARD__<SECTION>__<KEY>=<VALUE>

Examples:
    COVBOARD__LOGGING__LEVEL=DEBUG
    COVBOARD__RUNNER__GO_EXECUTABLE=/usr/local/go/bin/go
    COVBOARD__RUNNER__MAX_PARALLELISM=4
    COVBOARD__REPORTS__RETENTION_SEC=7200
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVBOARD__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped profile line.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RunnerConfig(BaseModel):
    """External test runner configuration.

    Env vars:
        COVBOARD__RUNNER__GO_EXECUTABLE: go binary name or path
        COVBOARD__RUNNER__MAX_PARALLELISM: Concurrent package runs (unset = one per package)
        COVBOARD__RUNNER__TIMEOUT_SEC: Per-package deadline (unset = none)
    """

    go_executable: str = Field(
        default="go",
        description="go binary used for both 'go test' and 'go tool cover'.",
    )
    test_args: list[str] = Field(
        default_factory=list,
        description="Extra arguments inserted before the package selector, e.g. ['-race'].",
    )
    max_parallelism: int | None = Field(
        default=None,
        description="Max concurrent 'go test' invocations. None runs every package at once. "
        "RISK: Large module trees spawn one compiler per package when unbounded.",
    )
    timeout_sec: float | None = Field(
        default=None,
        description="Per-package deadline. None relies on go test's own -timeout.",
    )

    @field_validator("max_parallelism")
    @classmethod
    def validate_parallelism(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError(f"max_parallelism must be >= 1, got {v}")
        return v

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"timeout_sec must be positive, got {v}")
        return v


class DiscoveryConfig(BaseModel):
    """Package discovery configuration.

    Env vars:
        COVBOARD__DISCOVERY__TEST_FILE_SUFFIX: Suffix marking test files
    """

    test_file_suffix: str = Field(
        default="_test.go",
        description="A directory holding at least one file with this suffix is a test package.",
    )
    extra_excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Additional directory names pruned during traversal.",
    )
    include_dirs: list[str] = Field(
        default_factory=list,
        description="Default-excluded directory names to traverse anyway (e.g. 'vendor').",
    )


class ReportsConfig(BaseModel):
    """HTML coverage report configuration.

    Env vars:
        COVBOARD__REPORTS__ENABLED: Generate HTML reports per package
        COVBOARD__REPORTS__DIRECTORY: Where reports are written
        COVBOARD__REPORTS__RETENTION_SEC: Report lifetime
        COVBOARD__REPORTS__SWEEP_INTERVAL_SEC: Cleanup sweep interval
    """

    enabled: bool = Field(
        default=True,
        description="Run 'go tool cover -html' for every package that produced a profile.",
    )
    directory: str | None = Field(
        default=None,
        description="Report directory. Default: a 'covboard-reports' folder in the system temp dir.",
    )
    retention_sec: float = Field(
        default=3600.0,
        description="How long a generated report stays available (1 hour default).",
    )
    sweep_interval_sec: float = Field(
        default=600.0,
        description="Interval between cleanup sweeps of expired reports (10 min default).",
    )

    @field_validator("retention_sec", "sweep_interval_sec")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v


class DashboardConfig(BaseModel):
    """Dashboard state configuration.

    Env vars:
        COVBOARD__DASHBOARD__PROJECT_PATH: Initial project (default: cwd)
        COVBOARD__DASHBOARD__SUBSCRIBER_QUEUE_SIZE: Per-subscriber backlog
    """

    project_path: str | None = Field(
        default=None,
        description="Go project shown at startup. Defaults to the current directory.",
    )
    subscriber_queue_size: int = Field(
        default=1024,
        description="Snapshots buffered per subscriber. A subscriber that falls this far "
        "behind is disconnected. 0 means unbounded.",
    )

    @field_validator("subscriber_queue_size")
    @classmethod
    def validate_queue_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"subscriber_queue_size must be >= 0, got {v}")
        return v


class CovboardConfig(BaseModel):
    """Root configuration for covboard.

    All settings can be configured via:
    1. Environment variables: COVBOARD__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
