#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for renderer options.

Renderer style settings can live in a dedicated ``.mdtree.toml``,
``.mdtree.yaml``/``.mdtree.yml`` or ``.mdtree.json`` file, or in the
``[tool.mdtree]`` table of a ``pyproject.toml``. Option names may be written
in camelCase (``bulletMarker``) or snake_case (``bullet_marker``). When the
loaded mapping has a ``markdown`` sub-table, that table holds the options.
"""

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mdtree.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from mdtree.exceptions import ConfigError
from mdtree.options.markdown import MarkdownRendererOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdtree]`` section from a pyproject.toml file.

    Returns
    -------
    dict
        Configuration dictionary, or empty dict if the section is absent

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from ``start_dir`` to the filesystem root,
    checking each directory for, in priority order:
    1. .mdtree.toml
    2. .mdtree.yaml / .mdtree.yml
    3. .mdtree.json
    4. pyproject.toml (with a [tool.mdtree] section)

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

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
            except ConfigError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load renderer configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension. When the loaded
    mapping contains a ``markdown`` table, that table is returned.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Option mapping suitable for :meth:`MarkdownRendererOptions.from_mapping`

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".mdtree.toml")
    >>> config.get("bulletMarker")
    '*'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        config = _load_pyproject_section(config_path)
    elif ext == ".toml":
        config = _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        config = _load_yaml_config(config_path)
    elif ext == ".json":
        config = _load_json_config(config_path)
    else:
        raise ConfigError(
            f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
        )

    section = config.get("markdown")
    if section is not None:
        if not isinstance(section, dict):
            raise ConfigError(
                f"'markdown' section in {config_path} must be a table, got {type(section).__name__}",
                str(config_path),
            )
        return section
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading TOML config {config_path}: {e}", str(config_path), e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Raises
    ------
    ConfigError
        If the file cannot be parsed or does not hold an object

    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading JSON config {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(f"JSON config file must contain an object, got {type(config).__name__}", str(config_path))
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    An empty YAML document loads as an empty mapping.

    Raises
    ------
    ConfigError
        If the file cannot be parsed or does not hold a mapping

    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading YAML config {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path))
    return config


def load_renderer_options(config_path: Path | str | None = None) -> MarkdownRendererOptions:
    """Load renderer options with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit ``config_path``
    2. The file named by the ``MDTREE_CONFIG`` environment variable
    3. Auto-discovered config file, starting at the current directory
    4. Built-in defaults

    Parameters
    ----------
    config_path : Path or str, optional
        Explicit configuration file

    Returns
    -------
    MarkdownRendererOptions
        Options built from the first configuration found

    Raises
    ------
    ConfigError
        If a configuration file is found but cannot be loaded or holds
        invalid option values

    """
    path: Path | str | None = config_path or os.environ.get(CONFIG_ENV_VAR) or find_config_file()
    if not path:
        return MarkdownRendererOptions()

    logger.debug(f"Loading renderer options from {path}")
    mapping = load_config_file(path)
    try:
        return MarkdownRendererOptions.from_mapping(mapping)
    except ValueError as e:
        raise ConfigError(f"Invalid renderer options in {path}: {e}", str(path), e) from e
