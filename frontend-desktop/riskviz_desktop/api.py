"""Thin `requests` wrapper around the ingestion backend."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import requests

API_BASE_URL = os.environ.get("RISKVIZ_API_URL", "http://127.0.0.1:8000").rstrip("/")
REQUEST_TIMEOUT = 30


class ApiError(Exception):
    """Raised for transport failures and non-2xx responses."""


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return response.text


def _request(method: str, path: str, **kwargs: Any) -> Any:
    try:
        response = requests.request(
            method, f"{API_BASE_URL}{path}", timeout=REQUEST_TIMEOUT, **kwargs
        )
    except requests.RequestException as exc:
        raise ApiError(str(exc)) from exc

    if not response.ok:
        raise ApiError(_error_message(response))
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(f"Invalid JSON response from {path}: {exc}") from exc


def get_risk_data() -> list[dict[str, Any]]:
    return _request("GET", "/risk-data")


def get_points() -> list[dict[str, Any]]:
    return _request("GET", "/points")


def health() -> dict[str, Any]:
    return _request("GET", "/health")


def upload_csv(file_path: str | Path) -> dict[str, Any]:
    """POST a CSV file under the ``file`` field; returns ``{success, message, rows}``."""
    path = Path(file_path)
    with open(path, "rb") as f:
        files = {"file": (path.name, f, "text/csv")}
        return _request("POST", "/upload", files=files)
