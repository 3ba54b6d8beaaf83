"""Tests for the Click command-line interface."""

from __future__ import annotations

import json

from passforge import __version__
from passforge.cli import cli


def _json(output: str):
    start = min(i for i in (output.find("{"), output.find("[")) if i >= 0)
    return json.loads(output[start:])


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_analyze_json(runner):
    result = runner.invoke(cli, ["-o", "json", "analyze", "aaaa"])
    assert result.exit_code == 0
    payload = _json(result.stdout)
    assert payload["label"] == "very weak"
    assert payload["length"] == 4
    assert payload["is_common"] is False


def test_analyze_prompts_for_password(runner):
    result = runner.invoke(cli, ["-o", "json", "analyze"], input="xK9#mQ2$vL7@pR4!\n")
    assert result.exit_code == 0
    payload = _json(result.stdout)
    assert payload["length"] == 16
    assert "xK9#mQ2$vL7@pR4!" not in result.stdout


def test_analyze_empty_json(runner):
    result = runner.invoke(cli, ["-o", "json", "analyze", ""])
    assert result.exit_code == 0
    payload = _json(result.stdout)
    assert payload["bits"] == 0.0
    assert payload["crack_time_label"] == ">1M years"
    assert payload["crack_time_years"] is None


def test_analyze_console(runner):
    result = runner.invoke(cli, ["analyze", "Tr0ub4dor&3"])
    assert result.exit_code == 0
    assert "bits" in result.stdout


def test_generate_json_with_analysis(runner):
    result = runner.invoke(cli, ["-o", "json", "generate", "-l", "20", "-n", "3"])
    assert result.exit_code == 0
    payload = _json(result.stdout)
    assert len(payload) == 3
    for entry in payload:
        assert len(entry["password"]) == 20
        assert entry["analysis"]["length"] == 20


def test_generate_json_without_analysis(runner):
    result = runner.invoke(
        cli, ["-o", "json", "generate", "--digits", "-l", "8", "--no-analyze"]
    )
    assert result.exit_code == 0
    payload = _json(result.stdout)
    assert list(payload[0]) == ["password"]
    assert payload[0]["password"].isdigit()


def test_generate_console(runner):
    result = runner.invoke(cli, ["-q", "generate", "-n", "2"])
    assert result.exit_code == 0


def test_generate_rejects_short_length(runner):
    result = runner.invoke(
        cli, ["generate", "-l", "2", "--lower", "--upper", "--digits"]
    )
    assert result.exit_code == 1


def test_generate_rejects_zero_count(runner):
    result = runner.invoke(cli, ["generate", "-n", "0"])
    assert result.exit_code == 2


def test_audit_json(runner):
    result = runner.invoke(cli, ["-o", "json", "audit", "-t", "500", "-l", "8"])
    payload = _json(result.stdout)
    assert payload["trials"] == 500
    assert payload["length_failures"] == 0
    assert payload["coverage_failures"] == 0
    assert result.exit_code == (0 if payload["passed"] else 1)


def test_config_file(runner, tmp_path):
    path = tmp_path / "passforge.toml"
    path.write_text("[generator]\ndefault_length = 7\nsymbols = false\n", encoding="utf-8")
    result = runner.invoke(
        cli, ["-c", str(path), "-o", "json", "generate", "--no-analyze"]
    )
    assert result.exit_code == 0
    password = _json(result.stdout)[0]["password"]
    assert len(password) == 7
    assert password.isalnum()


def test_audit_console(runner):
    result = runner.invoke(cli, ["audit", "-t", "200", "--lower", "--digits", "-l", "6"])
    assert result.exit_code in (0, 1)
    assert "Generator audit" in result.stdout
    assert "p-value >= 0.001" in result.stdout
