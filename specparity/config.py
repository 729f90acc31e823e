"""Project-wide config (.specparity/config.json) and the immutable audit config."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .enums import Cop, SpecStructure
from .utils import PROJECT_ROOT, safe_write_text

CONFIG_FILE = PROJECT_ROOT / ".specparity" / "config.json"
logger = logging.getLogger(__name__)

DEFAULT_COVERED_DIRECTORIES = [
    "models",
    "controllers",
    "services",
    "jobs",
    "mailers",
    "helpers",
]
DEFAULT_EXCLUDED_METHODS = ["initialize"]
DEFAULT_EXCLUDED_PREFIXES = ["before_", "after_", "around_", "validate_", "autosave_"]


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str
    choices: tuple[str, ...] = ()


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "ignore_memoization": ConfigKey(
        bool, True, "Exclude memoization idioms (@x ||= ...) from branch counts"
    ),
    "covered_directories": ConfigKey(
        list,
        DEFAULT_COVERED_DIRECTORIES,
        "Segments under app/ whose files must have spec parity",
    ),
    "excluded_methods": ConfigKey(
        list, DEFAULT_EXCLUDED_METHODS, "Method names that are never analyzed"
    ),
    "excluded_prefixes": ConfigKey(
        list,
        DEFAULT_EXCLUDED_PREFIXES,
        "Method name prefixes (framework hooks) that are never analyzed",
    ),
    "exclude": ConfigKey(list, [], "Path patterns to exclude from scanning"),
    "disabled_cops": ConfigKey(list, [], "Cop names to skip during scans"),
    "spec_structure": ConfigKey(
        str,
        SpecStructure.SYNTAX.value,
        "How spec files are read: syntax (parse, indent fallback) or indent",
        choices=tuple(s.value for s in SpecStructure),
    ),
}


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing keys with defaults.

    A missing or unreadable file yields the defaults; nothing is written back.
    """
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.debug("Ignoring unreadable config %s: %s", p, exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        if key not in config or not isinstance(config[key], schema.type):
            config[key] = copy.deepcopy(schema.default)
    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    Handles special cases:
    - "true"/"false" (also yes/no, 1/0) for bools
    - comma-separated items appended (deduplicated) for lists
    - declared choices for strings
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is bool:
        if raw.lower() in ("true", "1", "yes"):
            config[key] = True
        elif raw.lower() in ("false", "0", "no"):
            config[key] = False
        else:
            raise ValueError(f"Expected true/false for {key}, got: {raw}")
    elif schema.type is list:
        items = config.setdefault(key, [])
        for item in (part.strip() for part in raw.split(",")):
            if item and item not in items:
                items.append(item)
    elif schema.choices and raw not in schema.choices:
        raise ValueError(
            f"Expected one of {', '.join(schema.choices)} for {key}, got: {raw}"
        )
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


@dataclass(frozen=True)
class AuditConfig:
    """Immutable view of the config handed to every analysis component."""

    ignore_memoization: bool = True
    covered_directories: tuple[str, ...] = tuple(DEFAULT_COVERED_DIRECTORIES)
    excluded_methods: frozenset[str] = frozenset(DEFAULT_EXCLUDED_METHODS)
    excluded_prefixes: tuple[str, ...] = tuple(DEFAULT_EXCLUDED_PREFIXES)
    spec_structure: SpecStructure = SpecStructure.SYNTAX
    disabled_cops: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> AuditConfig:
        merged = {**default_config(), **config}
        try:
            structure = SpecStructure(merged["spec_structure"])
        except ValueError:
            logger.debug(
                "Unknown spec_structure %r, using syntax", merged["spec_structure"]
            )
            structure = SpecStructure.SYNTAX
        return cls(
            ignore_memoization=bool(merged["ignore_memoization"]),
            covered_directories=tuple(merged["covered_directories"]),
            excluded_methods=frozenset(merged["excluded_methods"]),
            excluded_prefixes=tuple(merged["excluded_prefixes"]),
            spec_structure=structure,
            disabled_cops=frozenset(merged["disabled_cops"]),
        )

    def is_excluded_method(self, name: str) -> bool:
        return name in self.excluded_methods or any(
            name.startswith(prefix) for prefix in self.excluded_prefixes
        )

    def cop_enabled(self, cop: Cop | str) -> bool:
        return str(cop) not in self.disabled_cops
