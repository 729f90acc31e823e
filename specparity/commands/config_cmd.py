"""config command: show/set/unset project configuration."""

from __future__ import annotations

import json

from specparity.config import CONFIG_SCHEMA, save_config, set_config_value, unset_config_value
from specparity.utils import colorize


def cmd_config(args) -> None:
    action = getattr(args, "config_action", None)
    if action == "set":
        _config_set(args)
    elif action == "unset":
        _config_unset(args)
    else:
        _config_show(args)


def _config_show(args) -> None:
    config = args.config
    print(colorize("\n  specparity config\n", "bold"))
    for key, schema in CONFIG_SCHEMA.items():
        value = config.get(key, schema.default)
        marker = "" if value == schema.default else colorize("  (modified)", "yellow")
        print(f"  {key:<22} {json.dumps(value)}{marker}")
        print(colorize(f"  {'':<22} {schema.description}", "dim"))
    print()


def _config_set(args) -> None:
    set_config_value(args.config, args.config_key, args.config_value)
    save_config(args.config)
    value = json.dumps(args.config[args.config_key])
    print(colorize(f"  Set {args.config_key} = {value}", "green"))


def _config_unset(args) -> None:
    unset_config_value(args.config, args.config_key)
    save_config(args.config)
    print(colorize(f"  Reset {args.config_key} to default", "green"))
