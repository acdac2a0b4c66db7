import json
from pathlib import Path

from click.testing import CliRunner

from api_schema_to_code.api_schema_to_code import api_schema_to_code
from api_schema_to_code.cli_utils import reconstruct_command_line

SCHEMA = str(Path(__file__).parent / "test_data" / "api.json")


def run(*args):
    return CliRunner().invoke(api_schema_to_code, list(args))


class TestCli:
    def test_generates_files(self, tmp_path):
        out = tmp_path / "out"
        result = run(SCHEMA, str(out))
        assert result.exit_code == 0, result.output
        assert "Generated 12 file(s)" in result.output

        page = (out / "Page.java").read_text()
        assert page.startswith("// Generated by api_schema_to_code v")
        assert "api.json" in page.splitlines()[0]
        assert (out / "options" / "Proxy.java").exists()

    def test_existing_output_requires_force(self, tmp_path):
        out = tmp_path / "out"
        assert run(SCHEMA, str(out)).exit_code == 0

        result = run(SCHEMA, str(out))
        assert result.exit_code == 1
        assert "already exist" in result.output

        result = run("--force", SCHEMA, str(out))
        assert result.exit_code == 0, result.output

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"java_package": "org.example", "add_generation_comment": False}))
        out = tmp_path / "out"

        result = run("--config", str(config), SCHEMA, str(out))
        assert result.exit_code == 0, result.output
        assert (out / "Page.java").read_text().startswith("package org.example;\n")

    def test_generation_failure_writes_nothing(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"type_overrides": {"Page.click.options.button": {"from": "string", "to": "MouseButton"}}}))
        out = tmp_path / "out"

        result = run("-c", str(config), SCHEMA, str(out))
        assert result.exit_code == 1
        assert "Page.click.options.button" in result.output
        assert not out.exists()

    def test_unknown_language(self, tmp_path):
        result = run("--language", "cobol", SCHEMA, str(tmp_path / "out"))
        assert result.exit_code == 2


def test_command_line_without_context():
    assert reconstruct_command_line(api_schema_to_code) == "api_schema_to_code"
