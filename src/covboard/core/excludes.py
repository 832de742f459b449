"""Canonical directory excludes for project traversal.

Tier 0 (HARDCODED_DIRS): Never traversed, not configurable.
    - VCS internals and covboard's own data directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Excluded by default. Users may opt a name
back in through ``discovery.include_dirs``.
    - Dependency vendoring, editor config, build caches

Directories are pruned by name while walking, so an excluded subtree is
never entered.
"""

from __future__ import annotations

from collections.abc import Iterable

# =============================================================================
# Tier 0: HARDCODED - Never traverse
# =============================================================================

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # covboard data
        ".covboard",
    )
)

# =============================================================================
# Tier 1: DEFAULT_PRUNABLE - Excluded by default, user can override
# =============================================================================

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # Dependency vendoring
        "vendor",
        "node_modules",
        # Ignored by the go tool itself
        "testdata",
        # IDE/Editor directories
        ".idea",  # JetBrains
        ".vscode",  # VS Code
        ".vs",  # Visual Studio
        # Misc caches
        ".cache",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if directory is hardcoded (never traversable, not overridable)."""
    return dirname in HARDCODED_DIRS


def build_prunable_dirs(
    extra: Iterable[str] = (),
    include: Iterable[str] = (),
) -> frozenset[str]:
    """Combine the default excludes with user additions and opt-ins.

    Opt-ins never remove hardcoded directories.
    """
    opted_in = {name for name in include if not is_hardcoded_dir(name)}
    return frozenset((PRUNABLE_DIRS | set(extra)) - opted_in)
