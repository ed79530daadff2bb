"""CLI entry point for toonline."""

from __future__ import annotations

import enum
import sys
from pathlib import Path
from typing import Annotated

import typer

from toonline.discovery import discover_files
from toonline.models import Delimiter, EncodeOptions
from toonline.normalize import InvalidInputError
from toonline.parallel import (
    _DEFAULT_MAX_FILE_SIZE,
    ConversionResult,
    convert_files_sequential,
)
from toonline.toon import encode_json


class DelimiterChoice(str, enum.Enum):
    """Delimiter names accepted on the command line."""

    comma = "comma"
    tab = "tab"
    pipe = "pipe"

    def to_delimiter(self) -> Delimiter:
        return Delimiter[self.name.upper()]


def _read_source(source: Path) -> str:
    """Read JSON text from a file, or from stdin when source is ``-``."""
    if str(source) == "-":
        return sys.stdin.read()
    return source.read_text("utf-8")


def _report(results: list[ConversionResult]) -> int:
    """Print per-file warnings and a summary; return the number of failures."""
    failures = 0
    for rel_path, _out_path, warning in results:
        if warning:
            failures += 1
            typer.echo(f"Warning: {rel_path}: {warning}", err=True)
    converted = len(results) - failures
    typer.echo(f"Converted {converted} of {len(results)} file(s).", err=True)
    return failures


app = typer.Typer(
    name="toonline",
    help="Convert JSON into TOON, a compact notation for LLM prompts.",
    no_args_is_help=False,
)


@app.command()
def main(
    source: Annotated[
        Path,
        typer.Argument(
            help="JSON file, directory of JSON files, or '-' for stdin.",
        ),
    ] = Path("-"),
    indent: Annotated[
        int,
        typer.Option("--indent", "-i", min=1, help="Spaces per indentation level."),
    ] = 2,
    delimiter: Annotated[
        DelimiterChoice,
        typer.Option(
            "--delimiter",
            "-d",
            case_sensitive=False,
            help="Separator for inline arrays and table rows.",
        ),
    ] = DelimiterChoice.comma,
    length_marker: Annotated[
        bool,
        typer.Option("--length-marker", help="Render array lengths as [#N]."),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Gitignore-style pattern to skip in directory mode (repeatable).",
        ),
    ] = None,
    max_file_size: Annotated[
        int,
        typer.Option(
            "--max-file-size",
            min=1,
            help="Skip files larger than this many bytes (default: 10MB).",
        ),
    ] = _DEFAULT_MAX_FILE_SIZE,
    fast: Annotated[
        bool,
        typer.Option(
            "--fast",
            help="Convert directory files in parallel worker processes.",
        ),
    ] = False,
) -> None:
    """Encode JSON as TOON.

    A file or stdin is printed to stdout. A directory is converted in place:
    every JSON file gets a sibling .toon file.
    """
    options = EncodeOptions(
        indent=indent,
        delimiter=delimiter.to_delimiter(),
        length_marker=length_marker,
    )

    if source.is_dir():
        _convert_directory(source.resolve(), options, exclude, max_file_size, fast)
        return

    try:
        text = _read_source(source)
        output = encode_json(text, options)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Error: cannot read {source}: {exc}", err=True)
        raise typer.Exit(1) from exc
    except InvalidInputError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    except RecursionError as exc:
        typer.echo(f"Error: {source}: nested too deeply to encode", err=True)
        raise typer.Exit(1) from exc

    typer.echo(output)


def _convert_directory(
    root: Path,
    options: EncodeOptions,
    exclude: list[str] | None,
    max_file_size: int,
    fast: bool,
) -> None:
    files = discover_files(root, exclude=exclude)
    if not files:
        typer.echo("No JSON files found.", err=True)
        raise typer.Exit(1)

    if fast:
        from toonline.parallel import convert_files_parallel

        results = convert_files_parallel(
            root, files, options=options, max_size_bytes=max_file_size
        )
    else:
        results = convert_files_sequential(
            root, files, options=options, max_size_bytes=max_file_size
        )

    if _report(results):
        raise typer.Exit(1)
