"""File discovery: Ruby source finding and exclusion matching."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from specparity.utils import get_project_root, normalize_separators

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "matches_exclusion",
    "find_source_files",
    "find_ruby_files",
]


# Directories that are never useful to scan; always pruned during traversal.
DEFAULT_EXCLUSIONS = frozenset(
    {
        ".git",
        ".bundle",
        ".svn",
        ".hg",
        "node_modules",
        "vendor",
        "tmp",
        "log",
        "coverage",
        "public",
    }
)


def matches_exclusion(rel_path: str, exclusion: str) -> bool:
    """Check if a relative path matches an exclusion pattern (path-component aware).

    Matches if exclusion is a path component (e.g. "concerns" matches
    "app/models/concerns/foo.rb") or a directory prefix (e.g. "app/admin"
    matches "app/admin/users.rb"). Does NOT do substring matching.

    Glob-style ``*`` in exclusion patterns is supported per path component.
    """
    parts = Path(rel_path).parts
    if exclusion in parts:
        return True
    if "*" in exclusion and any(fnmatch.fnmatch(part, exclusion) for part in parts):
        return True
    if "/" in exclusion or os.sep in exclusion:
        normalized = exclusion.rstrip("/").rstrip(os.sep)
        return rel_path.startswith(normalized + "/") or rel_path.startswith(
            normalized + os.sep
        )
    return False


def _safe_relpath(path: str | Path, start: str | Path) -> str:
    try:
        return os.path.relpath(str(path), str(start))
    except ValueError:
        return str(Path(path).resolve())


def _is_excluded_dir(name: str, rel_path: str, extra: tuple[str, ...]) -> bool:
    if name in DEFAULT_EXCLUSIONS:
        return True
    return any(
        matches_exclusion(rel_path, exclusion) or exclusion == name
        for exclusion in extra
    )


def find_source_files(
    path: str | Path, extensions: list[str], exclusions: list[str] | None = None
) -> list[str]:
    """Find all files with given extensions under a path, excluding patterns.

    Returned paths are project-relative with forward slashes, sorted.
    """
    project_root = get_project_root()
    root = Path(path)
    if not root.is_absolute():
        root = project_root / root
    extra = tuple(exclusions or ())
    if root.is_file():
        return [normalize_separators(_safe_relpath(root, project_root))]

    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = normalize_separators(_safe_relpath(dirpath, project_root))
        prefix = "" if rel_dir == "." else rel_dir + "/"
        dirnames[:] = sorted(
            d for d in dirnames if not _is_excluded_dir(d, prefix + d, extra)
        )
        for fname in filenames:
            if not any(fname.endswith(ext) for ext in extensions):
                continue
            rel_file = normalize_separators(
                _safe_relpath(os.path.join(dirpath, fname), project_root)
            )
            if extra and any(matches_exclusion(rel_file, ex) for ex in extra):
                continue
            files.append(rel_file)
    return sorted(files)


def find_ruby_files(path: str | Path, exclusions: list[str] | None = None) -> list[str]:
    return find_source_files(path, [".rb"], exclusions)
