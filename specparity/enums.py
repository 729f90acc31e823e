"""Canonical enums for method sites, coverage states and findings.

StrEnum values compare equal to their string values (Visibility.PUBLIC == "public"),
so JSON output and config strings need no translation layer.
"""

from __future__ import annotations

import enum


class MethodKind(enum.StrEnum):
    INSTANCE = "instance"
    CLASS = "class"


class Visibility(enum.StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


class BlockKind(enum.StrEnum):
    GROUP = "group"
    EXAMPLE = "example"


class CoverageState(enum.StrEnum):
    SKIPPED = "skipped"
    NO_SPEC_FILE = "no_spec_file"
    UNSPECCED = "unspecced"
    INSUFFICIENT_CONTEXTS = "insufficient_contexts"
    COVERED = "covered"


class Severity(enum.StrEnum):
    CONVENTION = "convention"
    WARNING = "warning"
    ERROR = "error"

    @property
    def code(self) -> str:
        """Single-letter RuboCop-style severity code."""
        return self.value[0].upper()


class SpecStructure(enum.StrEnum):
    SYNTAX = "syntax"
    INDENT = "indent"


class Cop(enum.StrEnum):
    SUFFICIENT_CONTEXTS = "SpecParity/SufficientContexts"
    PUBLIC_METHOD_HAS_SPEC = "SpecParity/PublicMethodHasSpec"
    NO_LET_BANG = "SpecParity/NoLetBang"
