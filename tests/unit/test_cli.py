"""Unit tests for the Typer CLI."""

import json
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from cli.app import app
from docintel import __version__
from normalization import normalize
from schemas.responses import AnalysisRunResult
from services.errors import PollFailedError, TimedOutError

runner = CliRunner()


def _run_result(sample_result):
    return AnalysisRunResult(
        document=normalize(sample_result, model_selector="invoice"),
        model_selector="invoice",
        model_id="prebuilt-invoice",
        runtime_ms=12,
    )


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_models_json():
    result = runner.invoke(app, ["models", "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["default_model"] == "mixed"
    assert payload["models"]["invoice"] == "prebuilt-invoice"


def test_models_table():
    result = runner.invoke(app, ["models"])
    assert result.exit_code == 0
    assert "invoice" in result.output


def test_config_show_masks_key(configured):
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["docintel_api_key"] == "**********"
    assert "secret-key" not in result.output


def test_analyze_prints_text(tmp_path, sample_result):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")
    mock_run = AsyncMock(return_value=_run_result(sample_result))

    with patch("services.analyzer.run_analysis", mock_run):
        result = runner.invoke(
            app,
            ["analyze", str(path), "--model", "invoice", "--format", "text", "--no-progress"],
        )

    assert result.exit_code == 0
    assert "Invoice 42\nTotal 10" in result.output
    request, options = mock_run.call_args.args
    assert request.file_bytes == b"%PDF-1.4"
    assert request.model_selector == "invoice"
    assert request.filename == "invoice.pdf"
    assert options.poll_max_ticks is None


def test_analyze_passes_poll_options(tmp_path, sample_result):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")
    mock_run = AsyncMock(return_value=_run_result(sample_result))

    with patch("services.analyzer.run_analysis", mock_run):
        result = runner.invoke(
            app,
            ["analyze", str(path), "--interval", "0.5", "--max-ticks", "5", "--no-progress"],
        )

    assert result.exit_code == 0
    request, options = mock_run.call_args.args
    assert request.model_selector == "mixed"
    assert options.poll_interval_seconds == 0.5
    assert options.poll_max_ticks == 5


def test_analyze_writes_output_file(tmp_path, sample_result):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")
    output = tmp_path / "out" / "result.csv"

    with patch("services.analyzer.run_analysis", AsyncMock(return_value=_run_result(sample_result))):
        result = runner.invoke(
            app, ["analyze", str(path), "-f", "csv", "-o", str(output), "--no-progress"]
        )

    assert result.exit_code == 0
    assert output.read_text(encoding="utf-8").startswith("Key,Value,Confidence\n")


def test_analyze_reports_errors(tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")

    for error in (TimedOutError("Operation did not finish", ticks=30), PollFailedError("corrupt")):
        with patch("services.analyzer.run_analysis", AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["analyze", str(path), "--no-progress"])
        assert result.exit_code == 1


def test_analyze_rejects_unsupported_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    result = runner.invoke(app, ["analyze", str(path), "--no-progress"])
    assert result.exit_code == 2


def test_analyze_rejects_unknown_format(tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")
    result = runner.invoke(app, ["analyze", str(path), "--format", "pdf"])
    assert result.exit_code == 2


def test_analyze_rejects_empty_file(tmp_path):
    path = tmp_path / "empty.pdf"
    path.write_bytes(b"")
    result = runner.invoke(app, ["analyze", str(path), "--no-progress"])
    assert result.exit_code == 2


def test_unknown_log_level():
    result = runner.invoke(app, ["--log-level", "loud", "models"])
    assert result.exit_code == 2
