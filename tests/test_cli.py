from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest
from typer.testing import CliRunner

from cli.app import app
from services.processor import build_default_processor
from settings import get_settings

CSV_CONTENT = (
    "MonitoringLocationID,CharacteristicName,ResultValue\n"
    'LOC001,"Temperature, water",20.0\n'
    'LOC001,"Temperature, water",22.0\n'
    'LOC002,"Temperature, water",18.25\n'
)


class StubClient:
    def __init__(self, config, results: Dict[str, float] | None = None) -> None:
        self.config = config
        self.results = results if results is not None else {"LOC001": 21.0, "LOC002": 18.25}
        self.uploaded_path: Path | None = None
        self.closed = False

    def upload_csv(self, path: Path) -> Dict[str, float]:
        self.uploaded_path = path
        return self.results

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def default_processor_cache():
    get_settings.cache_clear()
    build_default_processor.cache_clear()
    yield
    build_default_processor.cache_clear()
    get_settings.cache_clear()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_process_prints_averages(runner: CliRunner, tmp_path, default_processor_cache) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["process", str(csv_path)])

    assert result.exit_code == 0
    assert "LOC001    21" in result.stdout
    assert "LOC002    18.25" in result.stdout
    assert "temperature rows: 3" in result.stdout
    assert "locations: 2" in result.stdout


def test_process_without_stats(runner: CliRunner, tmp_path, default_processor_cache) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["process", str(csv_path), "--no-stats"])

    assert result.exit_code == 0
    assert "Summary" not in result.stdout


def test_process_reports_pipeline_error(runner: CliRunner, tmp_path, default_processor_cache) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text("MonitoringLocationID,CharacteristicName,ResultValue\n")

    result = runner.invoke(app, ["process", str(csv_path)])

    assert result.exit_code == 1
    assert "insufficient_data" in result.output


def test_process_honours_environment_settings(
    monkeypatch, runner: CliRunner, tmp_path, default_processor_cache
) -> None:
    monkeypatch.setenv("RESULT_DECIMAL_PLACES", "0")
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["process", str(csv_path), "--no-stats"])

    assert result.exit_code == 0
    assert "LOC002    18\n" in result.stdout


def test_upload_prints_returned_averages(monkeypatch, runner: CliRunner, tmp_path) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["--base-url", "http://api.test/", "upload", str(csv_path)])

    assert result.exit_code == 0
    assert "Uploading" in result.stdout
    assert "LOC002    18.25" in result.stdout
    assert stub.uploaded_path == csv_path
    assert stub.config.base_url == "http://api.test"
    assert stub.closed is True


def test_upload_passes_retry_option(monkeypatch, runner: CliRunner, tmp_path) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["--retries", "1", "upload", str(csv_path)])

    assert result.exit_code == 0
    assert stub.config.max_retries == 1
