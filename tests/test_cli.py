"""
Tests for the cadence command line interface.
"""

import json

from typer.testing import CliRunner

from cadence import __version__
from cadence.cli import app

runner = CliRunner()


class TestVersion:

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestValidate:

    def test_valid_config(self, tmp_path):
        path = tmp_path / "cadence.yaml"
        path.write_text(
            "version: 1\n"
            "name: users_api\n"
            "base_url: http://localhost:8000\n"
            "env:\n"
            "  token: abc\n"
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "Valid config" in result.output
        assert "users_api" in result.output

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "cadence.yaml"
        path.write_text("version: 0\n")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Validation failed" in result.output


class TestCompare:

    def write(self, tmp_path, name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    def test_equal_documents(self, tmp_path):
        left = self.write(tmp_path, "expected.json", {"id": 1, "tags": [], "name": "a"})
        right = self.write(tmp_path, "actual.json", {"name": "a", "id": 1.0, "tags": None})
        result = runner.invoke(app, ["compare", left, right])
        assert result.exit_code == 0, result.output
        assert "Documents are equal" in result.output

    def test_different_documents(self, tmp_path):
        left = self.write(tmp_path, "expected.json", {"id": 1, "name": "a"})
        right = self.write(tmp_path, "actual.json", {"id": 2, "name": "a"})
        result = runner.invoke(app, ["compare", left, right])
        assert result.exit_code == 1
        assert "assertion failed" in result.output
        assert "diff:" in result.output

    def test_no_diff(self, tmp_path):
        left = self.write(tmp_path, "expected.json", [1, 2])
        right = self.write(tmp_path, "actual.json", [2, 1])
        result = runner.invoke(app, ["compare", "--no-diff", left, right])
        assert result.exit_code == 1
        assert "diff:" not in result.output

    def test_unparsable_document(self, tmp_path):
        left = self.write(tmp_path, "expected.json", {})
        bad = tmp_path / "bad.json"
        bad.write_text("{unclosed: [")
        result = runner.invoke(app, ["compare", left, str(bad)])
        assert result.exit_code == 2


class TestInfo:

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Cadence" in result.output
