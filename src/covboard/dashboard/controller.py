"""Dashboard state and lifecycle.

The controller owns the selected project, the snapshot broadcaster, the
run orchestrator, and the HTML report store, and runs the periodic sweep
that expires old reports.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from covboard.config.loader import resolve_reports_dir
from covboard.config.models import CovboardConfig
from covboard.core.errors import ProjectError, ResultsError, RunError
from covboard.dashboard.broadcaster import SnapshotBroadcaster
from covboard.testing.coverage.html import HtmlReportStore
from covboard.testing.discovery import discover_targets, is_go_project
from covboard.testing.models import DashboardSnapshot, FileCoverage, ProjectInfo
from covboard.testing.orchestrator import ExecutorFactory, RunOrchestrator

logger = structlog.get_logger()


@dataclass
class DashboardController:
    """
    Orchestrates dashboard components.

    Components:
    - SnapshotBroadcaster: current snapshot and live subscribers
    - RunOrchestrator: one test run at a time
    - HtmlReportStore: generated reports and their expiry sweep
    """

    config: CovboardConfig = field(default_factory=CovboardConfig)
    project_path: Path | None = None
    executor_factory: ExecutorFactory | None = None

    broadcaster: SnapshotBroadcaster = field(init=False)
    reports: HtmlReportStore = field(init=False)
    orchestrator: RunOrchestrator = field(init=False)
    _run_task: asyncio.Task[DashboardSnapshot] | None = field(default=None, init=False)
    _sweep_task: asyncio.Task[None] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Initialize components."""
        if self.project_path is None:
            configured = self.config.dashboard.project_path
            self.project_path = Path(configured).expanduser() if configured else Path.cwd()
        self.project_path = self.project_path.resolve()

        self.broadcaster = SnapshotBroadcaster(
            DashboardSnapshot(project_path=str(self.project_path), project_name=self.project_name),
            queue_size=self.config.dashboard.subscriber_queue_size,
        )
        self.reports = HtmlReportStore(
            resolve_reports_dir(self.config),
            retention_sec=self.config.reports.retention_sec,
            go_executable=self.config.runner.go_executable,
        )
        self.orchestrator = RunOrchestrator(
            self.broadcaster,
            self.config,
            reports=self.reports if self.config.reports.enabled else None,
            executor_factory=self.executor_factory,
        )

    @property
    def project_name(self) -> str:
        assert self.project_path is not None
        return self.project_path.name

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self.broadcaster.current

    @property
    def is_running(self) -> bool:
        return self.orchestrator.is_running or (
            self._run_task is not None and not self._run_task.done()
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Start the report sweep loop."""
        if self._sweep_task is None or self._sweep_task.done():
            self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info("dashboard started", project=str(self.project_path))

    async def stop(self) -> None:
        """Cancel the sweep loop and any active run."""
        logger.info("dashboard stopping")
        for task in (self._sweep_task, self._run_task):
            if task is None or task.done():
                continue
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._sweep_task = None
        self._run_task = None
        logger.info("dashboard stopped")

    async def _sweep_loop(self) -> None:
        interval = self.config.reports.sweep_interval_sec
        while True:
            await asyncio.sleep(interval)
            self.reports.sweep()

    # =========================================================================
    # Runs
    # =========================================================================

    def start_run(self) -> bool:
        """Kick off a background run. Returns False if one is already active."""
        if self.is_running:
            logger.info("run_rejected", reason="run in progress")
            return False
        self._run_task = asyncio.create_task(self._run())
        return True

    async def _run(self) -> DashboardSnapshot:
        assert self.project_path is not None
        return await self.orchestrator.run(self.project_path, self.project_name)

    async def wait_for_run(self) -> DashboardSnapshot | None:
        """Wait for the background run, if any, and return its final snapshot."""
        if self._run_task is None:
            return None
        return await self._run_task

    # =========================================================================
    # Project selection and lookups
    # =========================================================================

    def set_project_path(self, path: str | Path) -> DashboardSnapshot:
        """Switch to another Go project and publish an empty snapshot for it.

        Raises:
            ProjectError: If the path is missing, not a directory, or not a
                Go project. State is left untouched.
            RunError: RUN_IN_PROGRESS while a run is active.
        """
        candidate = Path(path).expanduser()
        if not candidate.exists():
            raise ProjectError.not_found(str(candidate))
        if not candidate.is_dir():
            raise ProjectError.not_directory(str(candidate))
        if not is_go_project(candidate, excluded_dirs=self.orchestrator.excluded_dirs()):
            raise ProjectError.not_go_project(str(candidate))
        if self.is_running:
            raise RunError.in_progress(self.orchestrator.active_run_id or "pending")

        self.project_path = candidate.resolve()
        snapshot = DashboardSnapshot(
            project_path=str(self.project_path),
            project_name=self.project_name,
            status_message=f"Project path set to {self.project_path}",
        )
        self.broadcaster.publish(snapshot)
        logger.info("project_selected", project=str(self.project_path))
        return snapshot

    async def project_info(self) -> ProjectInfo:
        """Describe the selected project and its test packages.

        Raises:
            RunError: DISCOVERY_FAILED if the tree cannot be traversed.
        """
        assert self.project_path is not None
        targets = await asyncio.to_thread(
            discover_targets,
            self.project_path,
            excluded_dirs=self.orchestrator.excluded_dirs(),
            test_suffix=self.config.discovery.test_file_suffix,
        )
        return ProjectInfo(
            project_path=str(self.project_path),
            project_name=self.project_name,
            packages=tuple(t.target_id for t in targets),
        )

    def coverage_for(self, target_id: str) -> tuple[FileCoverage, ...]:
        """Per-file coverage of one package from the current snapshot.

        Raises:
            ResultsError: TARGET_NOT_FOUND if the package has no result.
        """
        result = self.broadcaster.current.find_result(target_id)
        if result is None:
            raise ResultsError.target_not_found(target_id)
        return result.files

    def html_report(self, handle: str) -> str:
        """Themed HTML coverage report.

        Raises:
            ResultsError: REPORT_NOT_FOUND for unknown or expired handles.
        """
        return self.reports.render(handle)
