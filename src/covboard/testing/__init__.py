"""Go test discovery, execution, coverage parsing and run orchestration."""

from covboard.testing.discovery import discover_targets, is_go_project, read_module_name
from covboard.testing.executor import TestExecutor, extract_coverage_percent
from covboard.testing.models import (
    CoverageBlock,
    DashboardSnapshot,
    FileCoverage,
    ProjectInfo,
    TestResult,
    TestTarget,
)
from covboard.testing.orchestrator import RunOrchestrator

__all__ = [
    "CoverageBlock",
    "DashboardSnapshot",
    "FileCoverage",
    "ProjectInfo",
    "RunOrchestrator",
    "TestExecutor",
    "TestResult",
    "TestTarget",
    "discover_targets",
    "extract_coverage_percent",
    "is_go_project",
    "read_module_name",
]
