"""
Tests for the bondtrans command-line interface.

The CLI is exercised with offline backends only.
"""

import json

import pytest
from typer.testing import CliRunner

from bondtrans import __version__
from bondtrans.cli import app


runner = CliRunner()


@pytest.fixture
def emissions_file(tmp_path):
    path = tmp_path / "emissions.json"
    path.write_text(json.dumps({
        "count": 1,
        "items": [{
            "isin_code": "US037833DY36",
            "emitent_branch_name_eng": "Banking",
            "kind_name_eng": "International bonds",
            "status_name_eng": "matured",
        }],
    }), encoding="utf-8")
    return path


class TestTranslateCommand:
    """Tests for `bondtrans translate`."""

    def test_translate_to_file(self, emissions_file, tmp_path):
        output = tmp_path / "out.json"

        result = runner.invoke(app, [
            "translate", str(emissions_file),
            "--kind", "bond-emission",
            "--lang", "zh",
            "--backend", "none",
            "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["lang"] == "zh"
        assert data["count"] == 1
        assert data["items"][0]["emitent_branch_name_eng"] == "銀行業"
        assert data["items"][0]["status_name_eng"] == "已到期"
        assert data["items"][0]["kind_name_eng"] == "International bonds"

    def test_remote_fallback_field(self, tmp_path):
        source = tmp_path / "emitent.json"
        source.write_text(json.dumps({"items": [{"profile_eng": "Builds aircraft."}]}), encoding="utf-8")
        output = tmp_path / "out.json"

        result = runner.invoke(app, [
            "translate", str(source),
            "--kind", "issuer",
            "--lang", "zh",
            "--variant", "traditional",
            "--backend", "dummy",
            "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["lang"] == "cht"
        assert data["items"][0]["profile_eng"] == "[zh-TW] Builds aircraft."

    def test_extra_terms(self, tmp_path):
        source = tmp_path / "emitent.json"
        source.write_text(json.dumps({"branch_name_eng": "Mining"}), encoding="utf-8")
        terms = tmp_path / "terms.csv"
        terms.write_text("source,target\nMining,採礦業\n", encoding="utf-8")
        output = tmp_path / "out.json"

        result = runner.invoke(app, [
            "translate", str(source),
            "--kind", "issuer",
            "--backend", "none",
            "--terms", str(terms),
            "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8"))["branch_name_eng"] == "採礦業"

    def test_unknown_kind(self, emissions_file):
        result = runner.invoke(app, [
            "translate", str(emissions_file), "--kind", "guarantor", "--backend", "none",
        ])

        assert result.exit_code == 2

    def test_unknown_language(self, emissions_file):
        result = runner.invoke(app, [
            "translate", str(emissions_file), "--lang", "fr", "--backend", "none",
        ])

        assert result.exit_code == 2

    def test_unknown_backend(self, emissions_file):
        result = runner.invoke(app, [
            "translate", str(emissions_file), "--backend", "babelfish",
        ])

        assert result.exit_code == 1

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, [
            "translate", str(tmp_path / "missing.json"), "--backend", "none",
        ])

        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path):
        source = tmp_path / "broken.json"
        source.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["translate", str(source), "--backend", "none"])

        assert result.exit_code == 1


class TestInspectionCommands:
    """Tests for `bondtrans terms` and `bondtrans policy`."""

    def test_terms_search(self):
        result = runner.invoke(app, ["terms", "--search", "Banking"])

        assert result.exit_code == 0
        assert "銀行業" in result.output
        assert "Telecommunications" not in result.output

    def test_terms_no_match(self):
        result = runner.invoke(app, ["terms", "--search", "zzzz"])

        assert result.exit_code == 0
        assert "No terms match" in result.output

    def test_policy(self):
        result = runner.invoke(app, ["policy", "--kind", "issuer"])

        assert result.exit_code == 0
        assert "profile_eng" in result.output
        assert "emitent_branch_name_eng" not in result.output

    def test_policy_unknown_kind(self):
        result = runner.invoke(app, ["policy", "--kind", "guarantor"])

        assert result.exit_code == 2

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
