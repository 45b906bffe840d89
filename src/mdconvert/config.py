#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/config.py
"""Configuration file discovery and loading for the mdconvert CLI.

A configuration file holds up to three tables, one per pipeline stage::

    [markdown]
    parse_definition_lists = false

    [html]
    heading_ids = true

    [document]
    css_mode = "embed"

Files are TOML, YAML or JSON, or the ``[tool.mdconvert]`` table of a
``pyproject.toml``. Without an explicit path the search walks up from the
working directory and then tries the home directory.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from mdconvert.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from mdconvert.exceptions import ValidationError
from mdconvert.options.html import DocumentShellOptions, HtmlRendererOptions
from mdconvert.options.markdown import MarkdownParserOptions

# Config table name -> options class it configures
CONFIG_SECTIONS: Dict[str, type] = {
    "markdown": MarkdownParserOptions,
    "html": HtmlRendererOptions,
    "document": DocumentShellOptions,
}


def _read_toml(config_path: Path) -> Any:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mdconvert]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        data = _read_toml(pyproject_path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above ``start_dir``.

    In each directory the dedicated files (``.mdconvert.toml``,
    ``.mdconvert.yaml``, ``.mdconvert.yml``, ``.mdconvert.json``) are tried
    before a ``pyproject.toml`` with a ``[tool.mdconvert]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Where to start; defaults to the current working directory

    Returns
    -------
    Path or None
        The first configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()
    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # A broken pyproject.toml in a parent directory is not ours to report
                pass

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in the parent directories, then in the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration file, choosing the format from its name.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``, ``.yml`` or ``.json`` file, or a pyproject.toml

    Returns
    -------
    dict
        The configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed or not a mapping

    Examples
    --------
    >>> config = load_config_file(".mdconvert.toml")
    >>> config.get("document", {}).get("css_mode")
    'embed'

    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    reader = _READERS.get(config_path.suffix.lower())
    if reader is None:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {config_path.suffix}. Use .toml, .yaml, .yml or .json"
        )

    try:
        config = reader(config_path)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at the top level, got {type(config).__name__}"
        )
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority, highest first: the ``--config`` path, the ``MDCONVERT_CONFIG``
    environment variable, then auto-discovery. Returns an empty dict when
    nothing is found.

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)
    discovered = discover_config_file()
    if discovered:
        return load_config_file(discovered)
    return {}


def build_options_from_config(
    config: Mapping[str, Any],
) -> tuple[MarkdownParserOptions, HtmlRendererOptions, DocumentShellOptions]:
    """Turn a configuration mapping into options for the three pipeline stages.

    Raises
    ------
    ValidationError
        If the mapping has an unknown table or key, or a value is out of range

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise ValidationError(
            f"Unknown configuration section(s): {', '.join(unknown)}. Expected: {', '.join(CONFIG_SECTIONS)}",
            parameter_name=unknown[0],
        )

    built: Dict[str, Any] = {}
    for section, options_class in CONFIG_SECTIONS.items():
        values = config.get(section) or {}
        if not isinstance(values, Mapping):
            raise ValidationError(
                f"Configuration section [{section}] must be a table, got {type(values).__name__}",
                parameter_name=section,
                parameter_value=values,
            )
        try:
            built[section] = options_class.from_mapping(values)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid value in configuration section [{section}]: {e}",
                parameter_name=section,
                original_error=e,
            ) from e

    return built["markdown"], built["html"], built["document"]


__all__ = [
    "CONFIG_SECTIONS",
    "build_options_from_config",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
]
