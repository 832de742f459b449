"""Tests for error types and codes."""

import pytest

from covboard.core.errors import (
    ConfigError,
    CovboardError,
    ErrorCode,
    ProjectError,
    ResultsError,
    RunError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.PROJECT_NOT_FOUND, 3000),
            (ErrorCode.PROJECT_NOT_GO, 3000),
            (ErrorCode.RUN_IN_PROGRESS, 6000),
            (ErrorCode.DISCOVERY_FAILED, 6000),
            (ErrorCode.TARGET_NOT_FOUND, 7000),
            (ErrorCode.REPORT_NOT_FOUND, 7000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestCovboardError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = CovboardError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = CovboardError(
            code=ErrorCode.REPORT_NOT_FOUND,
            message="Report expired",
        )

        # When
        result = str(error)

        # Then
        assert result == "[7002] REPORT_NOT_FOUND: Report expired"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Typed errors behave like ordinary exceptions."""
        with pytest.raises(CovboardError) as exc_info:
            raise ResultsError.target_not_found("calc")

        assert exc_info.value.code == ErrorCode.TARGET_NOT_FOUND


class TestConfigError:
    """ConfigError factory method tests."""

    def test_given_parse_failure_when_parse_error_then_includes_path(self) -> None:
        error = ConfigError.parse_error("/etc/covboard.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/etc/covboard.yaml" in error.message
        assert error.details == {"path": "/etc/covboard.yaml", "reason": "bad indent"}

    def test_given_bad_value_when_invalid_value_then_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("runner.max_parallelism", 0, "must be >= 1")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "0"
        assert "runner.max_parallelism" in error.message


class TestProjectError:
    """ProjectError factory method tests."""

    def test_given_missing_path_when_not_found_then_not_retryable(self) -> None:
        error = ProjectError.not_found("/nope")

        assert error.code == ErrorCode.PROJECT_NOT_FOUND
        assert error.retryable is False
        assert error.message == "Path does not exist: /nope"

    def test_given_plain_dir_when_not_go_project_then_mentions_go_mod(self) -> None:
        error = ProjectError.not_go_project("/tmp/x")

        assert error.code == ErrorCode.PROJECT_NOT_GO
        assert "go.mod" in error.message


class TestRunError:
    """RunError factory method tests."""

    def test_given_active_run_when_in_progress_then_retryable(self) -> None:
        error = RunError.in_progress("abcd1234")

        assert error.code == ErrorCode.RUN_IN_PROGRESS
        assert error.retryable is True
        assert error.details == {"run_id": "abcd1234"}

    def test_given_walk_failure_when_discovery_failed_then_includes_root(self) -> None:
        error = RunError.discovery_failed("/src", "permission denied")

        assert error.code == ErrorCode.DISCOVERY_FAILED
        assert "/src" in error.message
