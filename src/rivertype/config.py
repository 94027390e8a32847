# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the RiverType configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from rivertype.parser.combinators import DEFAULT_MAX_DEPTH
from rivertype.views.dot import RANKDIRS, RenderOptions

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".rivertype.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class RiverConfig:
    """The parsed RiverType configuration.

    Attributes:
        max_depth: Maximum nesting of type forms accepted by the parsers.
        render: Presentation settings for DOT output.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    render: RenderOptions = field(default_factory=RenderOptions)


def load_config(path: Path) -> RiverConfig:
    """Load and parse a RiverType configuration file.

    Args:
        path: Path to the ``.rivertype.yaml`` file.

    Returns:
        A RiverConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> Path | None:
    """Return the configuration file in *directory*, or None if there is none."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>") -> RiverConfig:
    """Parse configuration YAML text into a RiverConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return RiverConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    _reject_unknown_keys(data, {"max-depth", "graph"}, source_label)

    max_depth = DEFAULT_MAX_DEPTH
    if "max-depth" in data:
        max_depth = _require_int(data, "max-depth", source_label)
        if max_depth < 1:
            raise ConfigError(f"{source_label}: 'max-depth' must be at least 1")

    render = RenderOptions()
    if "graph" in data:
        render = _parse_graph_section(data["graph"], f"{source_label}: graph")

    return RiverConfig(max_depth=max_depth, render=render)


def _parse_graph_section(section: object, location: str) -> RenderOptions:
    """Parse the ``graph`` mapping into RenderOptions."""
    if not isinstance(section, dict):
        raise ConfigError(f"{location} must be a YAML mapping")

    _reject_unknown_keys(section, {"name", "rankdir", "fontname", "clusters"}, location)

    defaults = RenderOptions()
    graph_name = _require_string(section, "name", location) if "name" in section else defaults.graph_name
    rankdir = _require_string(section, "rankdir", location) if "rankdir" in section else defaults.rankdir
    fontname = _require_string(section, "fontname", location) if "fontname" in section else defaults.fontname
    clusters = defaults.clusters
    if "clusters" in section:
        clusters = section["clusters"]
        if not isinstance(clusters, bool):
            raise ConfigError(f"{location}: 'clusters' must be a boolean")

    if rankdir not in RANKDIRS:
        raise ConfigError(f"{location}: 'rankdir' must be one of {', '.join(RANKDIRS)}, got {rankdir!r}")

    return RenderOptions(graph_name=graph_name, rankdir=rankdir, fontname=fontname, clusters=clusters)


def _reject_unknown_keys(mapping: dict[str, object], known: set[str], source_label: str) -> None:
    unknown = sorted(str(key) for key in mapping if key not in known)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s) {', '.join(repr(k) for k in unknown)}")


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising ConfigError if it has another type."""
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _require_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    """Extract an integer field from a mapping, raising ConfigError if it has another type."""
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{source_label}: '{key}' must be an integer")
    return value
