"""Go coverage profiles and the HTML reports rendered from them.

Usage:
    from covboard.testing.coverage import parse_profile_file

    files = parse_profile_file(Path("coverage.out"), project_root)
"""

from covboard.testing.coverage.gocov import (
    CoverageParseError,
    GocovParser,
    ParsedProfile,
    build_file_coverage,
    parse_profile_file,
)
from covboard.testing.coverage.html import HtmlReportStore, inject_theme

__all__ = [
    "CoverageParseError",
    "GocovParser",
    "HtmlReportStore",
    "ParsedProfile",
    "build_file_coverage",
    "inject_theme",
    "parse_profile_file",
]
