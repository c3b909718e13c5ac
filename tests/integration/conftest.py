"""Integration test fixtures — real files, no network."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def payload_files(tmp_path: Path, chart_payload, history_payload, forex_payload) -> dict[str, Path]:
    """The three sample payloads written to JSON files."""
    paths = {}
    for name, payload in (
        ("chart", chart_payload),
        ("history", history_payload),
        ("forex", forex_payload),
    ):
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(payload))
        paths[name] = path
    return paths
