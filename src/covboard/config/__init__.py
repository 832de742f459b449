"""Config module exports."""

from covboard.config.loader import load_config, resolve_reports_dir
from covboard.config.models import (
    CovboardConfig,
    DashboardConfig,
    DiscoveryConfig,
    LoggingConfig,
    ReportsConfig,
    RunnerConfig,
)

__all__ = [
    "load_config",
    "resolve_reports_dir",
    "CovboardConfig",
    "DashboardConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "ReportsConfig",
    "RunnerConfig",
]
