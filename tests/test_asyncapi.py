"""Tests for AsyncAPI document validation.

The AsyncAPI CLI itself is never run; subprocess.run is patched.
"""

import logging
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from contract_validator.asyncapi import find_asyncapi_files, validate_asyncapi_files
from contract_validator.asyncapi.document import precheck_document
from contract_validator.asyncapi.run_validate import main, run
from contract_validator.asyncapi.runner import AsyncApiRunner
from contract_validator.config import ValidatorConfig
from contract_validator.exceptions import ExternalToolError, ValidationError
from contract_validator.report import ValidationResult

RUN = "contract_validator.asyncapi.runner.subprocess.run"


def _fail_for(*names: str):
    """subprocess.run side effect that fails for files with the given names."""

    def _run(cmd, **kwargs):
        if Path(cmd[-1]).name in names:
            raise subprocess.CalledProcessError(1, cmd)
        return subprocess.CompletedProcess(cmd, 0)

    return _run


class TestPrecheck:
    """YAML pre-check before the external tool runs."""

    def test_valid_document_passes(self, write_asyncapi, valid_asyncapi):
        path = write_asyncapi("orders.yaml", valid_asyncapi)
        result = ValidationResult(path)

        assert precheck_document(path, result) is True
        assert result.ok
        assert result.warnings == []

    def test_syntax_error_reports_line(self, write_asyncapi):
        path = write_asyncapi("broken.yaml", "asyncapi: 2.6.0\ninfo: [unclosed\n")
        result = ValidationResult(path)

        assert precheck_document(path, result) is False
        assert not result.ok
        assert "line" in result.errors[0]
        assert result.errors[0]["line"] >= 2

    def test_non_mapping_root_fails(self, write_asyncapi):
        path = write_asyncapi("list.yaml", "- a\n- b\n")
        result = ValidationResult(path)

        assert precheck_document(path, result) is False
        assert "must be a mapping" in result.errors[0]["message"]

    def test_missing_version_field_only_warns(self, write_asyncapi):
        path = write_asyncapi("noversion.yml", "info:\n  title: x\n")
        result = ValidationResult(path)

        assert precheck_document(path, result) is True
        assert result.ok
        assert "'asyncapi'" in result.warnings[0]["message"]

    def test_empty_file_is_an_empty_mapping(self, write_asyncapi):
        path = write_asyncapi("empty.yaml", "")
        result = ValidationResult(path)

        assert precheck_document(path, result) is True
        assert len(result.warnings) == 1


class TestAsyncApiRunner:
    """Subprocess invocation of `asyncapi validate`."""

    def test_command_uses_absolute_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        runner = AsyncApiRunner(["npx", "asyncapi"])

        cmd = runner.build_command(Path("asyncapi/orders.yaml"))

        assert cmd[:3] == ["npx", "asyncapi", "validate"]
        assert Path(cmd[3]).is_absolute()
        assert cmd[3] == str(tmp_path / "asyncapi" / "orders.yaml")

    def test_success(self, tmp_path: Path):
        with patch(RUN, return_value=subprocess.CompletedProcess([], 0)) as mock_run:
            AsyncApiRunner(timeout=30).validate(tmp_path / "a.yaml")

        kwargs = mock_run.call_args.kwargs
        assert kwargs["check"] is True
        assert kwargs["timeout"] == 30
        # Output is not captured: the tool writes straight to the terminal
        assert "stdout" not in kwargs
        assert "capture_output" not in kwargs

    def test_nonzero_exit_is_validation_error(self, tmp_path: Path):
        with patch(RUN, side_effect=subprocess.CalledProcessError(2, ["asyncapi"])):
            with pytest.raises(ValidationError, match="exit code 2"):
                AsyncApiRunner().validate(tmp_path / "a.yaml")

    def test_missing_executable_is_tool_error(self, tmp_path: Path):
        with patch(RUN, side_effect=FileNotFoundError("asyncapi")):
            with pytest.raises(ExternalToolError, match="Failed to run 'asyncapi'"):
                AsyncApiRunner().validate(tmp_path / "a.yaml")

    def test_timeout_is_tool_error(self, tmp_path: Path):
        with patch(RUN, side_effect=subprocess.TimeoutExpired(["asyncapi"], 5)):
            with pytest.raises(ExternalToolError, match="timed out"):
                AsyncApiRunner(timeout=5).validate(tmp_path / "a.yaml")

    def test_empty_command_rejected(self):
        with pytest.raises(ExternalToolError):
            AsyncApiRunner([])


class TestValidateAsyncApiFiles:
    """Per-file loop keeps going after failures."""

    def test_continues_after_failure(self, write_asyncapi, valid_asyncapi):
        first = write_asyncapi("a.yaml", valid_asyncapi)
        second = write_asyncapi("b.yaml", valid_asyncapi)
        third = write_asyncapi("c.yml", valid_asyncapi)

        with patch(RUN, side_effect=_fail_for("b.yaml")) as mock_run:
            results = validate_asyncapi_files([first, second, third])

        assert mock_run.call_count == 3
        assert [r.ok for r in results] == [True, False, True]
        assert results[1].errors[0]["message"] == f"Error validating {second}"

    def test_precheck_failure_skips_external_tool(self, write_asyncapi):
        path = write_asyncapi("broken.yaml", "key: [unclosed\n")
        runner = MagicMock(spec=AsyncApiRunner)

        results = validate_asyncapi_files([path], runner)

        runner.validate.assert_not_called()
        assert not results[0].ok

    def test_logs_each_file(self, write_asyncapi, valid_asyncapi, caplog: pytest.LogCaptureFixture):
        path = write_asyncapi("a.yaml", valid_asyncapi)
        caplog.set_level(logging.INFO)

        with patch(RUN, side_effect=_fail_for("a.yaml")):
            validate_asyncapi_files([path])

        assert f"Validating {path}..." in caplog.text
        assert f"Error validating {path}" in caplog.text

    def test_find_asyncapi_files(self, write_asyncapi, valid_asyncapi, tmp_path: Path):
        write_asyncapi("nested/a.yaml", valid_asyncapi)
        write_asyncapi("b.yml", valid_asyncapi)
        write_asyncapi("readme.md", "# nope")

        found = find_asyncapi_files(tmp_path / "asyncapi")

        assert sorted(p.name for p in found) == ["a.yaml", "b.yml"]


class TestRun:
    """Exit codes of the AsyncAPI command."""

    def test_no_files_exits_zero(self, config, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.INFO)

        with patch(RUN) as mock_run:
            assert run(config) == 0

        mock_run.assert_not_called()
        assert "No AsyncAPI files found" in caplog.text

    def test_all_pass_exits_zero(self, config, write_asyncapi, valid_asyncapi):
        write_asyncapi("a.yaml", valid_asyncapi)
        write_asyncapi("b.yaml", valid_asyncapi)

        with patch(RUN, side_effect=_fail_for()):
            assert run(config) == 0

    def test_any_failure_exits_one(self, config, write_asyncapi, valid_asyncapi):
        write_asyncapi("a.yaml", valid_asyncapi)
        write_asyncapi("b.yaml", valid_asyncapi)

        with patch(RUN, side_effect=_fail_for("a.yaml")) as mock_run:
            assert run(config) == 1

        assert mock_run.call_count == 2

    def test_missing_tool_exits_one(self, config, write_asyncapi, valid_asyncapi):
        write_asyncapi("a.yaml", valid_asyncapi)

        with patch(RUN, side_effect=FileNotFoundError("asyncapi")):
            assert run(config) == 1

    def test_empty_command_exits_one(self, config, write_asyncapi, valid_asyncapi):
        write_asyncapi("a.yaml", valid_asyncapi)
        config.asyncapi_command = []

        assert run(config) == 1

    def test_main_rejects_arguments(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--format", "json"])

        assert exc_info.value.code == 2

    def test_main_scans_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(ValidatorConfig, "set_logging", lambda self: None)

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 0
