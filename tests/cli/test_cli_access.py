"""Tests for ``rootguard access`` CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from rootguard.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_POLICY_YAML = """\
access:
  forbidden: [bash]
  allowed:
    public: [search, "enterprise_*"]
"""


class TestAccessCheck:
    def test_allowed(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "check", "public", "check_stock"])

        assert result.exit_code == 0
        assert "allowed" in result.output

    def test_denied(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "check", "public", "file_delete"])

        assert result.exit_code == 1
        assert "denied" in result.output
        assert "File operation blocked" in result.output

    def test_superadmin(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "check", "superadmin", "bash"])
        assert result.exit_code == 0

    def test_uses_config_file(self, tmp_path: Path) -> None:
        f = tmp_path / "rootguard.yaml"
        f.write_text(_POLICY_YAML)

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(f), "access", "check", "public", "search"])
        assert result.exit_code == 0

        result = runner.invoke(main, ["--config", str(f), "access", "check", "public", "check_stock"])
        assert result.exit_code == 1

    def test_config_from_env(self, tmp_path: Path) -> None:
        f = tmp_path / "rootguard.yaml"
        f.write_text(_POLICY_YAML)

        runner = CliRunner(env={"ROOTGUARD_CONFIG": str(f)})
        result = runner.invoke(main, ["access", "check", "public", "search"])
        assert result.exit_code == 0

    def test_invalid_config(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("- not a mapping\n")

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(f), "access", "check", "public", "search"])
        assert result.exit_code == 2
        assert "Configuration error" in result.output


class TestAccessPatterns:
    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "patterns", "support", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["role"] == "support"
        assert "create_ticket" in data["allowed"]
        assert "bash" in data["forbidden"]

    def test_superadmin_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "patterns", "superadmin", "--format", "json"])

        data = json.loads(result.output)
        assert data["allowed"] == ["*"]
        assert data["forbidden"] == []

    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "patterns", "public"])

        assert result.exit_code == 0
        assert "enterprise_*" in result.output
        assert "deny" in result.output


class TestAccessFilter:
    def test_filters_in_order(self, tmp_path: Path) -> None:
        f = tmp_path / "rootguard.yaml"
        f.write_text(_POLICY_YAML)

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--config", str(f), "access", "filter", "public", "bash", "search", "enterprise_x"],
        )

        assert result.exit_code == 0
        assert result.output.split() == ["search", "enterprise_x"]

    def test_requires_tools(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["access", "filter", "public"])
        assert result.exit_code == 2
