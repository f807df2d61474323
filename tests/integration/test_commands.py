import json
from pathlib import Path

from region_cli.__main__ import app
from region_cli.core.config import load_config


def test_check_json_hit(runner) -> None:
    result = runner.invoke(app, ["--json", "check", "--x", "-0.5", "--y", "-0.5", "--r", "2.5"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["hit"] is True
    assert payload["shapes"] == ["quarter_disk"]
    assert payload["x"] == -0.5


def test_check_plain_miss_with_decimal_comma(runner) -> None:
    result = runner.invoke(app, ["--plain", "check", "--x", "1", "--y", "0,5", "--r", "2"])
    assert result.exit_code == 0
    assert "y\t0.5" in result.stdout
    assert "hit\tfalse" in result.stdout


def test_check_rich_output(runner) -> None:
    result = runner.invoke(app, ["check", "--x", "0", "--y", "0", "--r", "1"])
    assert result.exit_code == 0
    assert "HIT" in result.stdout
    assert "Region check" in result.stdout


def test_check_reports_all_errors(runner) -> None:
    result = runner.invoke(app, ["--plain", "check", "--x", "abc", "--y", "9", "--r", "7"])
    assert result.exit_code == 1
    assert "error\tx must be a real number" in result.stdout
    assert "error\ty must be in range [-5, 5]" in result.stdout
    assert "error\tr must be one of {1, 1.5, 2, 2.5, 3}" in result.stdout


def test_check_json_errors(runner) -> None:
    result = runner.invoke(app, ["--json", "check", "--x", "0", "--y", "0"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload == {"ok": False, "errors": ["r is required"]}


def test_check_uses_config_bounds(runner, tmp_path: Path) -> None:
    cfg = tmp_path / "open.toml"
    cfg.write_text("[validation]\nallowed_radii = []\n")
    result = runner.invoke(
        app, ["--config", str(cfg), "--json", "check", "--x", "1.7", "--y", "0", "--r", "1.7"]
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["hit"] is True


def test_bad_config_exits_with_code_2(runner, tmp_path: Path) -> None:
    cfg = tmp_path / "broken.toml"
    cfg.write_text("[validation\n")
    result = runner.invoke(app, ["--config", str(cfg), "check", "--x", "0", "--y", "0", "--r", "1"])
    assert result.exit_code == 2
    assert "Config error" in result.stdout


def test_form_success(runner) -> None:
    result = runner.invoke(app, ["--plain", "form", "x=-0.5&y=-0.5&r=2.5"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["hit"] is True
    assert "now" in payload
    assert "execMicros" in payload


def test_form_validation_failure(runner) -> None:
    result = runner.invoke(app, ["--plain", "form", "x=abc&y=9&r=2"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["errors"] == ["x must be a real number", "y must be in range [-5, 5]"]


def test_form_json_body(runner) -> None:
    result = runner.invoke(
        app,
        ["--plain", "form", '{"x": 0.25, "y": 0.25, "r": 1}', "--content-type", "application/json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["hit"] is True


def test_form_method_not_allowed(runner) -> None:
    result = runner.invoke(app, ["form", "x=0&y=0&r=1", "--method", "DELETE"])
    assert result.exit_code == 1
    assert "405" in result.stdout


def test_batch_json_summary(runner, write_temp_json, sample_points) -> None:
    path = write_temp_json("points.json", sample_points)
    result = runner.invoke(app, ["--json", "batch", str(path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"] == {"total": 4, "hits": 2, "misses": 1, "invalid": 1}
    assert payload["results"][3]["errors"] == [
        "x must be a real number",
        "y must be in range [-5, 5]",
        "r must be one of {1, 1.5, 2, 2.5, 3}",
    ]


def test_batch_writes_report(runner, write_temp_json, sample_points, tmp_path: Path) -> None:
    path = write_temp_json("points.json", sample_points)
    report = tmp_path / "out" / "report.json"
    result = runner.invoke(app, ["--plain", "batch", str(path), "--output", str(report)])
    assert result.exit_code == 0
    assert "total\t4" in result.stdout
    assert report.exists()
    assert json.loads(report.read_text())["summary"]["total"] == 4


def test_batch_save_uses_output_dir(runner, monkeypatch, write_temp_json, sample_points, tmp_path: Path) -> None:
    monkeypatch.setenv("REGION_OUTPUT_DIR", str(tmp_path / "evals"))
    path = write_temp_json("points.json", sample_points)
    result = runner.invoke(app, ["--plain", "batch", str(path), "--save"])
    assert result.exit_code == 0
    assert (tmp_path / "evals" / "evaluations.json").exists()


def test_batch_from_stdin(runner) -> None:
    result = runner.invoke(
        app,
        ["--json", "batch", "--stdin"],
        input=json.dumps([{"x": 0, "y": 0, "r": 1}]),
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["summary"]["hits"] == 1


def test_batch_requires_input(runner) -> None:
    result = runner.invoke(app, ["batch"])
    assert result.exit_code == 2


def test_batch_unreadable_file(runner, tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = runner.invoke(app, ["batch", str(path)])
    assert result.exit_code == 1
    assert "Failed to read input" in result.stdout


def test_batch_non_utf8_file(runner, tmp_path: Path) -> None:
    path = tmp_path / "points.json"
    path.write_bytes(b'[{"x": "\xff", "y": "0", "r": "1"}]')
    result = runner.invoke(app, ["batch", str(path)])
    assert result.exit_code == 1
    assert "Failed to read input" in result.stdout


def test_batch_deeply_nested_file(runner, tmp_path: Path) -> None:
    path = tmp_path / "nested.json"
    path.write_text("[" * 100000 + "]" * 100000)
    result = runner.invoke(app, ["batch", str(path)])
    assert result.exit_code == 1
    assert "Failed to read input" in result.stdout


def test_describe_json(runner) -> None:
    result = runner.invoke(app, ["--json", "describe", "--r", "2"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["rectangle"]["x_max"] == 2.0
    assert payload["quarter_disk"]["radius"] == 1.0


def test_describe_rejects_bad_radius(runner) -> None:
    result = runner.invoke(app, ["--plain", "describe", "--r", "-1"])
    assert result.exit_code == 1
    assert "r must be positive" in result.stdout


def test_describe_ignores_point_bounds(runner, tmp_path: Path) -> None:
    cfg = tmp_path / "shifted.toml"
    cfg.write_text("[validation]\nx_min = 1\nx_max = 3\ny_min = 1\ny_max = 3\n")
    result = runner.invoke(app, ["--config", str(cfg), "--json", "describe", "--r", "2"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["triangle"]["vertices"] == [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]


def test_config_show_json(runner, isolated_config: Path) -> None:
    result = runner.invoke(app, ["--json", "config", "show"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["path"] == str(isolated_config.resolve())
    assert payload["config"]["validation"]["x_min"] == -5.0


def test_config_init_writes_defaults(runner, tmp_path: Path) -> None:
    cfg = tmp_path / "new" / "config.toml"
    result = runner.invoke(app, ["--config", str(cfg), "config", "init"])
    assert result.exit_code == 0
    assert cfg.exists()
    assert load_config(cfg)["validation"]["allowed_radii"] == [1.0, 1.5, 2.0, 2.5, 3.0]

    again = runner.invoke(app, ["--config", str(cfg), "config", "init"])
    assert again.exit_code == 1
    assert "already exists" in again.stdout

    forced = runner.invoke(app, ["--config", str(cfg), "--plain", "config", "init", "--force"])
    assert forced.exit_code == 0
    assert forced.stdout.startswith("path\t")
