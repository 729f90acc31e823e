"""Source ↔ spec path conventions for Rails-style layouts.

``<root>/app/<segment>/<name>.rb`` maps to ``<root>/spec/<segment>/<name>_spec.rb``.
Absolute and project-relative paths are handled identically; a path without an
``app`` segment simply has no spec counterpart.
"""

from __future__ import annotations

from pathlib import Path

from specparity.utils import normalize_separators

APP_MARKER = "app"
SPEC_MARKER = "spec"
SOURCE_SUFFIX = ".rb"
SPEC_SUFFIX = "_spec.rb"


def _swap_marker(path: str, old: str, new: str) -> str | None:
    if path.startswith(f"{old}/"):
        return f"{new}/" + path[len(old) + 1:]
    if f"/{old}/" in path:
        return path.replace(f"/{old}/", f"/{new}/", 1)
    return None


def spec_path_for(source_path: str | Path) -> str | None:
    """Return the conventional spec path for *source_path*, or None if not applicable."""
    path = normalize_separators(str(source_path))
    if not path.endswith(SOURCE_SUFFIX) or path.endswith(SPEC_SUFFIX):
        return None
    swapped = _swap_marker(path, APP_MARKER, SPEC_MARKER)
    if swapped is None:
        return None
    return swapped[: -len(SOURCE_SUFFIX)] + SPEC_SUFFIX


def source_path_for(spec_path: str | Path) -> str | None:
    """Inverse of :func:`spec_path_for`.

    Every ``spec`` segment is a candidate marker, tried nearest-the-file first;
    the first candidate that maps back to *spec_path* wins. A project root such
    as ``/home/spec/shop`` therefore does not shadow the real marker.
    """
    path = normalize_separators(str(spec_path))
    if not path.endswith(SPEC_SUFFIX):
        return None
    parts = path.split("/")
    # The file name itself is never a marker.
    for index in reversed(range(len(parts) - 1)):
        if parts[index] != SPEC_MARKER:
            continue
        swapped = "/".join(parts[:index] + [APP_MARKER] + parts[index + 1:])
        candidate = swapped[: -len(SPEC_SUFFIX)] + SOURCE_SUFFIX
        if spec_path_for(candidate) == path:
            return candidate
    return None


def project_root_for(source_path: str | Path) -> str | None:
    """Directory that contains the ``app`` segment ("" for relative paths)."""
    parts = normalize_separators(str(source_path)).split("/")
    if APP_MARKER not in parts:
        return None
    return "/".join(parts[: parts.index(APP_MARKER)])


def relative_spec_path(spec_path: str, source_path: str | Path) -> str:
    root = project_root_for(source_path)
    if not root:
        return spec_path
    prefix = root + "/"
    return spec_path[len(prefix):] if spec_path.startswith(prefix) else spec_path


def _under_app_segment(path: str, segment: str) -> bool:
    marker = f"{APP_MARKER}/{segment}/"
    return path.startswith(marker) or f"/{marker}" in path


def in_covered_directory(source_path: str | Path, covered: tuple[str, ...] | list[str]) -> bool:
    path = normalize_separators(str(source_path))
    return any(_under_app_segment(path, segment.strip("/")) for segment in covered)


def in_service_directory(source_path: str | Path) -> bool:
    return _under_app_segment(normalize_separators(str(source_path)), "services")


def is_spec_file(path: str | Path) -> bool:
    normalized = normalize_separators(str(path))
    return (
        normalized.endswith(SPEC_SUFFIX)
        or normalized.startswith(f"{SPEC_MARKER}/")
        or f"/{SPEC_MARKER}/" in normalized
    )
