from __future__ import annotations

from typing import List

import httpx
import pytest
import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config


def _client(handler, max_retries: int = 3) -> ApiClient:
    config = CLIConfig(base_url="http://api.test", max_retries=max_retries, retry_delay=0.0)
    return ApiClient(config, transport=httpx.MockTransport(handler))


@pytest.fixture()
def csv_path(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("MonitoringLocationID,CharacteristicName,ResultValue\nA,\"Temperature, water\",1\n")
    return path


def test_upload_posts_csv_file_field(csv_path) -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"A": 1.0})

    client = _client(handler)
    try:
        assert client.upload_csv(csv_path) == {"A": 1.0}
    finally:
        client.close()

    assert len(seen) == 1
    assert seen[0].url.path == "/api/process-csv"
    assert b'name="csvFile"; filename="data.csv"' in seen[0].read()


def test_upload_retries_server_errors(csv_path) -> None:
    responses = [
        httpx.Response(500, json={"detail": "boom", "kind": "internal_error"}),
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, json={"A": 1.0}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    client = _client(handler)

    assert client.upload_csv(csv_path) == {"A": 1.0}
    assert responses == []


def test_upload_gives_up_after_retry_budget(csv_path, capsys) -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(500, json={"detail": "boom", "kind": "internal_error"})

    client = _client(handler, max_retries=2)

    with pytest.raises(typer.Exit):
        client.upload_csv(csv_path)

    assert len(calls) == 3
    assert "500 (internal_error): boom" in capsys.readouterr().err


def test_upload_does_not_retry_client_errors(csv_path, capsys) -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(
            400, json={"detail": "CSV file is empty", "kind": "empty_file"}
        )

    client = _client(handler)

    with pytest.raises(typer.Exit):
        client.upload_csv(csv_path)

    assert len(calls) == 1
    assert "400 (empty_file): CSV file is empty" in capsys.readouterr().err


def test_upload_retries_connection_errors(csv_path) -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler, max_retries=1)

    with pytest.raises(typer.Exit):
        client.upload_csv(csv_path)

    assert len(calls) == 2


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://example.test/")
    monkeypatch.setenv("CLI_TIMEOUT", "5")
    monkeypatch.setenv("CLI_MAX_RETRIES", "not-a-number")

    config = load_config()

    assert config.base_url == "http://example.test"
    assert config.timeout == 5.0
    assert config.max_retries == 3
