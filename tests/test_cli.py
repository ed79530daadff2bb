"""Tests for the CLI entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from toonline.cli import app

runner = CliRunner()


class TestCLI:
    """Tests for single-document conversion."""

    def test_file_to_stdout(self, sample_json_file: Path) -> None:
        result = runner.invoke(app, [str(sample_json_file)])
        assert result.exit_code == 0
        assert result.stdout == "id: 123\nname: Ada\nactive: true\n"

    def test_stdin_default(self) -> None:
        result = runner.invoke(app, [], input='{"tags":["admin","ops","dev"]}')
        assert result.exit_code == 0
        assert result.stdout == "tags[3]: admin,ops,dev\n"

    def test_stdin_dash(self) -> None:
        result = runner.invoke(app, ["-"], input='"[3]: x,y"')
        assert result.exit_code == 0
        assert result.stdout == '"[3]: x,y"\n'

    def test_delimiter_option(self) -> None:
        result = runner.invoke(
            app, ["--delimiter", "pipe"], input='{"tags":["a","b","c"]}'
        )
        assert result.exit_code == 0
        assert result.stdout == "tags[3|]: a|b|c\n"

    def test_length_marker_and_indent(self) -> None:
        result = runner.invoke(
            app,
            ["--length-marker", "--indent", "4"],
            input='{"user":{"tags":["x"]}}',
        )
        assert result.exit_code == 0
        assert result.stdout == "user:\n    tags[#1]: x\n"

    def test_invalid_json(self) -> None:
        result = runner.invoke(app, [], input="{broken")
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_blank_input(self) -> None:
        result = runner.invoke(app, [], input="   ")
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_deeply_nested_input(self) -> None:
        result = runner.invoke(app, [], input="[" * 100_000 + "]" * 100_000)
        assert result.exit_code == 1
        assert "nested too deeply" in result.output

    def test_recursion_while_encoding(self, sample_json_file: Path) -> None:
        with patch("toonline.cli.encode_json", side_effect=RecursionError):
            result = runner.invoke(app, [str(sample_json_file)])
        assert result.exit_code == 1
        assert "nested too deeply to encode" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "cannot read" in result.output

    def test_bad_delimiter_rejected(self) -> None:
        result = runner.invoke(app, ["--delimiter", "semicolon"], input="{}")
        assert result.exit_code != 0

    def test_programming_error_not_swallowed(self, sample_json_file: Path) -> None:
        with patch("toonline.cli.encode_json", side_effect=TypeError("bug")):
            result = runner.invoke(app, [str(sample_json_file)])
        assert result.exit_code == 1
        assert isinstance(result.exception, TypeError)


class TestDirectoryMode:
    """Tests for converting a directory of JSON files."""

    def test_converts_all_files(self, sample_json_dir: Path) -> None:
        result = runner.invoke(app, [str(sample_json_dir)])
        assert result.exit_code == 0
        assert "Converted 3 of 3" in result.output
        assert (sample_json_dir / "tags.toon").read_text("utf-8") == (
            "tags[3]: admin,ops,dev\n"
        )
        assert (sample_json_dir / "nested" / "empty.toon").is_file()
        assert not (sample_json_dir / "notes.toon").exists()

    def test_exclude(self, sample_json_dir: Path) -> None:
        result = runner.invoke(app, [str(sample_json_dir), "--exclude", "nested/"])
        assert result.exit_code == 0
        assert "Converted 2 of 2" in result.output
        assert not (sample_json_dir / "nested" / "empty.toon").exists()

    def test_fast(self, sample_json_dir: Path) -> None:
        result = runner.invoke(app, [str(sample_json_dir), "--fast"])
        assert result.exit_code == 0
        assert (sample_json_dir / "order.toon").is_file()

    def test_options_applied(self, sample_json_dir: Path) -> None:
        result = runner.invoke(
            app, [str(sample_json_dir), "--delimiter", "tab", "--exclude", "order.json"]
        )
        assert result.exit_code == 0
        assert (sample_json_dir / "tags.toon").read_text("utf-8") == (
            "tags[3\t]: admin\tops\tdev\n"
        )

    def test_invalid_file_reported(self, sample_json_dir: Path) -> None:
        (sample_json_dir / "broken.json").write_text("{", encoding="utf-8")
        result = runner.invoke(app, [str(sample_json_dir)])
        assert result.exit_code == 1
        assert "Warning: broken.json" in result.output
        assert "Converted 3 of 4" in result.output
        assert (sample_json_dir / "tags.toon").is_file()

    def test_size_limit(self, sample_json_dir: Path) -> None:
        result = runner.invoke(app, [str(sample_json_dir), "--max-file-size", "1"])
        assert result.exit_code == 1
        assert "skipped" in result.output

    def test_empty_directory(self, tmp_path: Path) -> None:
        (tmp_path / "readme.txt").write_text("hello", encoding="utf-8")
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1
        assert "No JSON files found" in result.output
