# SPDX-License-Identifier: MIT
"""Build configuration for tsplan.

Configuration is passed explicitly through every planning step; nothing
reads process-wide state except the loaders in this module.

Build options come from, highest precedence first:
    1. Command-line flags (--enable-wasm, --shared, --amalgamated, -O)
    2. Command-line variables: tsplan plan enable-wasm=1 optimize=release-fast
    3. Environment: TSPLAN_VARS (JSON) or ENABLE_WASM=1
    4. The [options] table of tsplan.toml in the project root
    5. Defaults (switches off, debug optimization)
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tsplan.core.errors import ConfigureError
from tsplan.core.options import BuildOptions, Optimize

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

CONFIG_FILE = "tsplan.toml"
VARS_ENV = "TSPLAN_VARS"

# Option key (as spelled in build switches) -> BuildOptions field
OPTION_FIELDS: dict[str, str] = {
    "enable-wasm": "enable_wasm",
    "build-shared": "build_shared",
    "amalgamated": "amalgamated",
    "optimize": "optimize",
}

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def parse_bool(value: Any, *, name: str = "value") -> bool:
    """Parse a boolean build switch.

    Args:
        value: A bool, int, or string such as "1", "true", "off".
        name: Option name, used in the error message.

    Returns:
        The parsed boolean.

    Raises:
        ConfigureError: If the value is not a recognized boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ConfigureError(f"expected a boolean, got {value!r}", name)


def normalize_option_key(key: str) -> str | None:
    """Map an option spelling to its canonical build-switch name.

    Accepts ``enable-wasm``, ``enable_wasm`` and ``ENABLE_WASM``.

    Returns:
        The canonical key, or None if it is not a build option.
    """
    canonical = key.strip().lower().replace("_", "-")
    if canonical in OPTION_FIELDS:
        return canonical
    return None


def options_from_mapping(
    values: Mapping[str, Any],
    *,
    base: BuildOptions | None = None,
    strict: bool = True,
    location: str | None = None,
) -> BuildOptions:
    """Apply option values on top of base options.

    Args:
        values: Option key -> value.
        base: Options to start from (defaults if None).
        strict: If True, unknown keys raise ConfigureError; otherwise
            they are ignored.
        location: Where the values came from, for error messages.

    Returns:
        New BuildOptions.

    Raises:
        ConfigureError: On unknown keys (strict mode) or bad values.
    """
    options = base or BuildOptions()
    updates: dict[str, Any] = {}
    for key, value in values.items():
        canonical = normalize_option_key(key)
        if canonical is None:
            if strict:
                raise ConfigureError(f"unknown build option {key!r}", location)
            continue
        if canonical == "optimize":
            updates["optimize"] = Optimize.parse(value)
        else:
            updates[OPTION_FIELDS[canonical]] = parse_bool(value, name=canonical)
    return replace(options, **updates)


def load_config_file(path: Path | str) -> dict[str, Any]:
    """Load the [options] table of a tsplan.toml file.

    Args:
        path: Path to the config file.

    Returns:
        The options table (empty if the file has none).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigureError: If the file is not valid TOML or [options] is
            not a table.
    """
    path = Path(path)
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigureError(str(e), str(path)) from e

    options = data.get("options", {})
    if not isinstance(options, dict):
        raise ConfigureError("[options] must be a table", str(path))
    return options


def get_cli_vars(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Get the variables passed through TSPLAN_VARS.

    Raises:
        ConfigureError: If TSPLAN_VARS is not a JSON object.
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(VARS_ENV)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigureError(f"invalid JSON: {e}", VARS_ENV) from e
    if not isinstance(data, dict):
        raise ConfigureError("expected a JSON object", VARS_ENV)
    return {str(k): str(v) for k, v in data.items()}


def get_var(
    name: str,
    default: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Get a build variable from TSPLAN_VARS or the environment.

    Args:
        name: Variable name.
        default: Value if the variable is not set.
        environ: Environment to read (os.environ if None).

    Returns:
        The variable value, or default.
    """
    environ = os.environ if environ is None else environ
    cli_vars = get_cli_vars(environ)
    if name in cli_vars:
        return cli_vars[name]
    return environ.get(name, default)


def options_from_environment(
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Collect build options set in the environment.

    Both TSPLAN_VARS entries and plain variables (ENABLE_WASM=1) are
    considered; TSPLAN_VARS wins.
    """
    environ = os.environ if environ is None else environ
    found: dict[str, str] = {}
    for key, field_name in OPTION_FIELDS.items():
        for spelling in (key, field_name.upper()):
            value = get_var(spelling, environ=environ)
            if value is not None:
                found[key] = value
                break
    return found


def load_options(
    root: Path | str = ".",
    *,
    variables: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> BuildOptions:
    """Load build options from every configuration source.

    Args:
        root: Project root (where tsplan.toml is looked for).
        variables: KEY=value variables from the command line.
        overrides: Explicit flags; only set values (True, or a mode
            name) are applied, so an absent flag never turns an option
            off.
        environ: Environment to read (os.environ if None).

    Returns:
        The effective BuildOptions.

    Raises:
        ConfigureError: On invalid values anywhere.
    """
    options = BuildOptions()

    config_path = Path(root) / CONFIG_FILE
    if config_path.is_file():
        logger.debug("Loading options from %s", config_path)
        options = options_from_mapping(
            load_config_file(config_path),
            base=options,
            location=str(config_path),
        )

    options = options_from_mapping(
        options_from_environment(environ), base=options, location="environment"
    )

    if variables:
        options = options_from_mapping(
            variables, base=options, location="command line"
        )

    if overrides:
        options = options_from_mapping(
            {key: value for key, value in overrides.items() if value},
            base=options,
            location="command line",
        )

    logger.debug("Effective options: %s", options)
    return options
