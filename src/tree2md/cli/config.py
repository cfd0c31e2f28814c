#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the tree2md CLI.

A configuration file is a flat mapping of option names (as accepted by
:meth:`tree2md.options.ConversionOptions.from_dict`) plus optional rule
sections::

    # .tree2md.toml
    bullet_marker = "-"
    link_style = "reference"

    [translators.mark]
    prefix = "=="
    postfix = "=="

    [table_translators.mark]
    prefix = "<mark>"
    postfix = "</mark>"

JSON, TOML and YAML files are supported, as is a ``[tool.tree2md]`` table in
``pyproject.toml``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from tree2md.constants import CONFIG_FILENAMES
from tree2md.exceptions import TranslatorConfigError
from tree2md.translators.base import TranslatorConfig, rule_from_mapping

logger = logging.getLogger(__name__)

RULE_SECTIONS = ("translators", "table_translators", "code_block_translators")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.tree2md]`` table from ``pyproject.toml``.

    Returns an empty dict when the table is absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("tree2md")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.tree2md] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` up to the root.

    In each directory the dedicated files are checked first, in the order
    ``.tree2md.toml``, ``.tree2md.yaml``, ``.tree2md.yml``, ``.tree2md.json``,
    then ``pyproject.toml`` (only when it has a ``[tool.tree2md]`` table).

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent directory search (see :func:`find_config_in_parents`) runs
    first; the user's home directory is the fallback.
    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or ``pyproject.toml`` file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file does not exist, cannot be read or parsed, or has an
        unsupported extension

    Examples
    --------
    >>> config = load_config_file(".tree2md.toml")
    >>> config.get("bullet_marker")
    '-'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            config = _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            config = _load_yaml_config(config_path)
        elif ext == ".json":
            config = _load_json_config(config_path)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    logger.debug("Loaded configuration from %s (%d keys)", config_path, len(config))
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    discover: bool = True,
) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. ``TREE2MD_CONFIG`` environment variable
    3. Auto-discovered config file (skipped when ``discover`` is false)

    Returns
    -------
    dict
        Loaded configuration (empty when no file applies)

    Raises
    ------
    argparse.ArgumentTypeError
        If a named config file cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)
    if discover:
        discovered = discover_config_file()
        if discovered:
            logger.debug("Discovered configuration file %s", discovered)
            return load_config_file(discovered)
    return {}


def split_rule_sections(config: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Dict[str, TranslatorConfig]]]:
    """Separate rule sections from plain options.

    Parameters
    ----------
    config : dict
        Loaded configuration

    Returns
    -------
    tuple
        ``(options, rules)`` where ``rules`` maps each of ``translators``,
        ``table_translators`` and ``code_block_translators`` to a dict of tag
        keys and static rules

    Raises
    ------
    argparse.ArgumentTypeError
        If a rule section is not a table of tables, or a rule is malformed

    Examples
    --------
    >>> options, rules = split_rule_sections({"bullet_marker": "-", "translators": {"mark": {"prefix": "=="}}})
    >>> options
    {'bullet_marker': '-'}
    >>> rules["translators"]["mark"].prefix
    '=='

    """
    options = {key: value for key, value in config.items() if key.replace("-", "_") not in RULE_SECTIONS}
    rules: Dict[str, Dict[str, TranslatorConfig]] = {section: {} for section in RULE_SECTIONS}

    for key, section in config.items():
        name = key.replace("-", "_")
        if name not in RULE_SECTIONS:
            continue
        if not isinstance(section, dict):
            raise argparse.ArgumentTypeError(f"'{key}' must be a table of tag rules, got {type(section).__name__}")
        for tags, data in section.items():
            if not isinstance(data, dict):
                raise argparse.ArgumentTypeError(f"Rule '{tags}' in '{key}' must be a table")
            try:
                rules[name][tags] = rule_from_mapping(data)
            except (TranslatorConfigError, TypeError) as e:
                raise argparse.ArgumentTypeError(f"Invalid rule '{tags}' in '{key}': {e}") from e

    return options, rules
