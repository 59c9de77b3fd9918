"""
Tests for the cli/ wrappers.

Tests cover:
- run() propagating the exit code and working directory
- policy-schema writing the Policy JSON Schema
"""

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from cli import schema
from cli._runner import PROJECT_ROOT, run


class TestRunner:
    """Tests for the shared subprocess runner."""

    @pytest.mark.anyio
    async def test_exit_code_propagated(self):
        with patch("cli._runner.subprocess.run", return_value=MagicMock(returncode=3)) as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                run(["ruff", "check"])

        assert exc_info.value.code == 3
        mock_run.assert_called_once_with(["ruff", "check"], cwd=PROJECT_ROOT)

    @pytest.mark.anyio
    async def test_project_root_holds_package(self):
        assert (PROJECT_ROOT / "iampolicy" / "__init__.py").is_file()


class TestSchemaCommand:
    """Tests for the policy-schema script."""

    @pytest.mark.anyio
    async def test_writes_schema_to_given_path(self, tmp_path, monkeypatch, capsys):
        target = tmp_path / "out" / "policy.schema.json"
        monkeypatch.setattr(sys, "argv", ["policy-schema", str(target)])

        schema.main()

        written = json.loads(target.read_text(encoding="utf-8"))
        assert set(written["properties"]) == {"Version", "Statement"}
        assert "Statement" in written["$defs"]
        assert str(target) in capsys.readouterr().out
