import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("REGION_CONFIG_FILE", str(path))
    monkeypatch.delenv("REGION_OUTPUT_DIR", raising=False)
    return path


@pytest.fixture()
def sample_points() -> List[Dict[str, Any]]:
    return [
        {"x": -0.5, "y": -0.5, "r": 2.5},
        {"x": -1, "y": -1, "r": 2.5},
        {"x": "1,5", "y": "-0,5", "r": "2"},
        {"x": "abc", "y": 9, "r": 7},
    ]


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
