"""File conversion, sequential and parallel, for directory sources."""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from toonline.models import EncodeOptions
from toonline.normalize import InvalidInputError
from toonline.toon import encode_json

_DEFAULT_MAX_FILE_SIZE = 10_000_000  # 10 MB

TOON_SUFFIX = ".toon"

ConversionResult = tuple[Path, Path | None, str | None]


def convert_file(
    root: Path,
    rel_path: Path,
    options: EncodeOptions,
    max_size_bytes: int,
) -> ConversionResult:
    """Convert one JSON file, writing ``<name>.toon`` next to it.

    Module-level function required for ProcessPoolExecutor pickling.

    Args:
        root: Directory being converted.
        rel_path: Relative path of the JSON file.
        options: Encoding options.
        max_size_bytes: Skip files larger than this.

    Returns:
        Tuple of (rel_path, output_path_or_None, warning_or_None).
    """
    abs_path = root / rel_path
    try:
        size = abs_path.stat().st_size
        if size > max_size_bytes:
            return (rel_path, None, f"skipped (>{max_size_bytes} bytes)")
        text = abs_path.read_text(encoding="utf-8")
        output = encode_json(text, options)
        out_path = abs_path.with_suffix(TOON_SUFFIX)
        out_path.write_text(output + "\n", encoding="utf-8")
    except (OSError, UnicodeDecodeError, InvalidInputError) as exc:
        return (rel_path, None, str(exc))
    except RecursionError:
        return (rel_path, None, "nested too deeply to encode")
    return (rel_path, out_path, None)


def convert_files_sequential(
    root: Path,
    files: list[Path],
    *,
    options: EncodeOptions,
    max_size_bytes: int = _DEFAULT_MAX_FILE_SIZE,
) -> list[ConversionResult]:
    """Convert files one after another, in the given order."""
    return [convert_file(root, rel, options, max_size_bytes) for rel in files]


def convert_files_parallel(
    root: Path,
    files: list[Path],
    *,
    options: EncodeOptions,
    max_size_bytes: int | None = None,
    max_workers: int | None = None,
) -> list[ConversionResult]:
    """Convert files in parallel using ProcessPoolExecutor.

    Args:
        root: Directory being converted.
        files: Relative JSON paths from discovery.
        options: Encoding options.
        max_size_bytes: Skip files larger than this (default 10MB).
        max_workers: Maximum number of worker processes.

    Returns:
        One result per file, sorted by path.
    """
    if max_size_bytes is None:
        max_size_bytes = _DEFAULT_MAX_FILE_SIZE
    if max_workers is None:
        max_workers = max(1, min(os.cpu_count() or 1, len(files)))

    results: list[ConversionResult] = []
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(convert_file, root, rel_path, options, max_size_bytes)
            for rel_path in files
        ]
        for future in as_completed(futures):
            results.append(future.result())

    results.sort(key=lambda result: result[0])
    return results
