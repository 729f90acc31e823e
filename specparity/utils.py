"""Shared utilities: project root, colors, status output, atomic writes."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(os.environ.get("SPECPARITY_ROOT", Path.cwd())).resolve()


def get_project_root() -> Path:
    """Return the active project root ($SPECPARITY_ROOT or the cwd at import)."""
    return PROJECT_ROOT


def normalize_separators(path: str) -> str:
    return path.replace("\\", "/")


def rel(path: str | Path) -> str:
    """Project-relative, forward-slash form of *path* (absolute when outside the root)."""
    resolved = Path(path).resolve()
    try:
        return normalize_separators(str(resolved.relative_to(get_project_root())))
    except ValueError:
        return normalize_separators(str(resolved))


def resolve_path(filepath: str) -> str:
    """Resolve a filepath to absolute, handling both relative and absolute."""
    p = Path(filepath)
    if p.is_absolute():
        return str(p.resolve())
    return str((get_project_root() / filepath).resolve())


# ── Atomic file writes ─────────────────────────────────────
def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except OSError:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def read_file_text(filepath: str | Path) -> str | None:
    """Read a file as text, returning None when it cannot be read."""
    try:
        return Path(filepath).read_text(errors="replace")
    except OSError:
        return None


COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def colorize(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def log(msg: str):
    """Print a dim status message to stderr."""
    print(colorize(msg, "dim"), file=sys.stderr)
