"""JSON file discovery with gitignore support."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pathspec

JSON_SUFFIXES: frozenset[str] = frozenset({".json"})

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "__pycache__",
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        "venv",
        ".venv",
        "env",
        "build",
        "dist",
        ".tox",
        ".mypy_cache",
        ".ruff_cache",
        ".pytest_cache",
    }
)


def _git_ls_files(root: Path) -> set[str] | None:
    """Return the set of git-tracked and untracked-but-not-ignored files.

    Returns:
        Set of repo-relative file paths, or None if git is unavailable
        or the directory is not a git repository.
    """
    if not (root / ".git").exists():
        return None
    try:
        result = subprocess.run(
            ["git", "ls-files", "--cached", "--others", "--exclude-standard"],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return set(result.stdout.splitlines())


def discover_files(
    root: Path,
    *,
    exclude: list[str] | None = None,
) -> list[Path]:
    """Walk root and return relative paths of JSON files to convert.

    Args:
        root: Directory to search.
        exclude: Additional gitignore-style patterns to skip.

    Returns:
        Relative paths, sorted.
    """
    git_files = _git_ls_files(root)
    gitignore = _load_gitignore(root) if git_files is None else None

    exclude_spec = None
    if exclude:
        exclude_spec = pathspec.PathSpec.from_lines("gitignore", exclude)

    results: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(
            d for d in dirnames if d not in SKIP_DIRS and not d.startswith(".")
        )

        rel_dir = Path(dirpath).relative_to(root)

        for fname in sorted(filenames):
            if fname.startswith(".") or Path(fname).suffix not in JSON_SUFFIXES:
                continue

            if (Path(dirpath) / fname).is_symlink():
                continue

            rel = rel_dir / fname
            rel_posix = rel.as_posix()

            if git_files is not None:
                if rel_posix not in git_files:
                    continue
            elif gitignore and gitignore.match_file(rel_posix):
                continue

            if exclude_spec and exclude_spec.match_file(rel_posix):
                continue

            results.append(rel)

    results.sort()
    return results


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore from root, returning a PathSpec matcher."""
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file():
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        return pathspec.PathSpec.from_lines("gitignore", lines)
    return pathspec.PathSpec.from_lines("gitignore", [])
