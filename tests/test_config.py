# Copyright 2026 RiverType Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the configuration file loader."""

from pathlib import Path

import pytest

from rivertype.config import CONFIG_FILE_NAME, ConfigError, RiverConfig, find_config, load_config
from rivertype.parser.combinators import DEFAULT_MAX_DEPTH
from rivertype.views.dot import RenderOptions

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty config file parses to the default configuration."""
    config = load_config(_write_config(tmp_path, ""))
    assert config == RiverConfig()
    assert config.max_depth == DEFAULT_MAX_DEPTH
    assert config.render == RenderOptions()


def test_full_config(tmp_path: Path) -> None:
    """Every supported field is read."""
    content = """\
max-depth: 16
graph:
  name: stream
  rankdir: LR
  fontname: Fira Code
  clusters: false
"""
    config = load_config(_write_config(tmp_path, content))
    assert config.max_depth == 16
    assert config.render == RenderOptions(graph_name="stream", rankdir="LR", fontname="Fira Code", clusters=False)


def test_partial_graph_section_keeps_other_defaults(tmp_path: Path) -> None:
    """Fields omitted from the graph section keep their defaults."""
    config = load_config(_write_config(tmp_path, "graph:\n  rankdir: BT\n"))
    assert config.render.rankdir == "BT"
    assert config.render.graph_name == "river"
    assert config.render.clusters is True


def test_find_config(tmp_path: Path) -> None:
    """find_config locates the config file in a directory."""
    assert find_config(tmp_path) is None
    path = _write_config(tmp_path, "max-depth: 8\n")
    assert find_config(tmp_path) == path


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("max-depth: [1\n", "Invalid YAML"),
        ("- a\n- b\n", "must be a YAML mapping"),
        ("max-depth: deep\n", "'max-depth' must be an integer"),
        ("max-depth: true\n", "'max-depth' must be an integer"),
        ("max-depth: 0\n", "at least 1"),
        ("colors: {}\n", "unknown field"),
        ("graph: LR\n", "graph must be a YAML mapping"),
        ("graph:\n  rankdir: UP\n", "'rankdir' must be one of"),
        ("graph:\n  rankdir: 1\n", "'rankdir' must be a string"),
        ("graph:\n  clusters: maybe\n", "'clusters' must be a boolean"),
        ("graph:\n  shape: box\n", "unknown field"),
    ],
)
def test_invalid_config(tmp_path: Path, content: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        load_config(_write_config(tmp_path, content))


def test_error_names_the_file(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "max-depth: deep\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    assert str(path) in str(exc_info.value)
