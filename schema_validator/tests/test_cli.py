from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from schema_validator.cli.main import cli

SCHEMA = {
    "title": "Person",
    "type": "object",
    "properties": {"name": {"type": "string"}},
    "required": ["name"],
}


def _write(tmp_path: Path, name: str, payload) -> str:
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


def test_validate_valid_document(tmp_path: Path) -> None:
    schema = _write(tmp_path, "schema.json", SCHEMA)
    data = _write(tmp_path, "data.json", {"name": "Ada"})

    result = CliRunner().invoke(cli, ["validate", schema, data, "--format", "simple"])

    assert result.exit_code == 0
    assert "valid" in result.output


def test_validate_invalid_document_as_json(tmp_path: Path) -> None:
    schema = _write(tmp_path, "schema.json", SCHEMA)
    data = _write(tmp_path, "data.json", {"name": 5})

    result = CliRunner().invoke(cli, ["validate", schema, data, "--format", "json"])

    assert result.exit_code == 1
    errors = json.loads(result.output)
    assert errors[0]["path"] == "$.name"
    assert errors[0]["tag"] == "type"


def test_validate_table_output(tmp_path: Path) -> None:
    schema = _write(tmp_path, "schema.json", SCHEMA)
    data = _write(tmp_path, "data.json", {})

    result = CliRunner().invoke(cli, ["validate", schema, data])

    assert result.exit_code == 1
    assert "required" in result.output


def test_validate_reports_hard_errors(tmp_path: Path) -> None:
    schema = _write(tmp_path, "schema.json", {"type": "object", "x-extra": True})
    data = _write(tmp_path, "data.json", {})

    strict = CliRunner().invoke(cli, ["validate", schema, data, "--mode", "strict"])
    assert strict.exit_code == 2
    assert "x-extra" in strict.output

    loose = CliRunner().invoke(cli, ["validate", schema, data, "--mode", "loose", "--format", "simple"])
    assert loose.exit_code == 0


def test_check_command(tmp_path: Path) -> None:
    good = _write(tmp_path, "good.json", SCHEMA)
    bad = _write(tmp_path, "bad.json", '{"type": "object", "properties": {"a": {"$ref": "#"}}}')

    ok = CliRunner().invoke(cli, ["check", good])
    assert ok.exit_code == 0
    assert "Person" in ok.output

    failed = CliRunner().invoke(cli, ["check", bad])
    assert failed.exit_code == 2
    assert "$ref" in failed.output
