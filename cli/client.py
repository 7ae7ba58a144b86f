from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Optional

import httpx
import typer

from cli.config import CLIConfig

logger = logging.getLogger(__name__)


class ApiClient:
    """Minimal HTTP client for the aggregator service."""

    def __init__(self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url, timeout=config.timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def upload_csv(self, path: Path) -> Dict[str, float]:
        """Post ``path`` to the API, retrying transport failures and 5xx responses."""
        if not path.exists():
            raise typer.BadParameter(f"File {path} does not exist.")
        if not path.is_file():
            raise typer.BadParameter(f"Path {path} is not a file.")

        contents = path.read_bytes()
        attempts = self._config.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._client.post(
                    "/api/process-csv",
                    files={"csvFile": (path.name, contents, "text/csv")},
                )
            except httpx.TransportError as exc:
                if attempt == attempts:
                    typer.secho(
                        f"Could not reach {self._config.base_url}: {exc}",
                        fg=typer.colors.RED,
                        err=True,
                    )
                    raise typer.Exit(code=1) from exc
                logger.warning("Upload failed, retrying: %s", exc, extra={"attempt": attempt})
                time.sleep(self._config.retry_delay)
                continue

            if response.is_server_error and attempt < attempts:
                logger.warning(
                    "Server error %d, retrying",
                    response.status_code,
                    extra={"attempt": attempt},
                )
                time.sleep(self._config.retry_delay)
                continue

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                self._handle_http_error(exc)
            payload = response.json()
            if not isinstance(payload, dict):
                raise typer.BadParameter("Unexpected response payload when uploading file.")
            return payload

        raise typer.Exit(code=1)  # pragma: no cover - loop always returns or exits

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        kind: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
            kind = data.get("kind")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        label = f"{exc.response.status_code} ({kind})" if kind else str(exc.response.status_code)
        message = f"Request failed with status {label}: {detail or 'no detail provided.'}"
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
