"""
Smoke tests for package structure and availability.

These tests verify that the package is installed correctly and that
top-level modules are importable.
"""

from __future__ import annotations

import importlib

from blockmodel import __version__


def test_package_importable() -> None:
    """Ensure the top-level package and core re-exports can be imported."""
    mod = importlib.import_module("blockmodel.core")
    for name in ("BlockModel", "BlockIndex", "GridBlock", "Predecessors", "Adjacency"):
        assert hasattr(mod, name), name


def test_version_is_set() -> None:
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_cli_module_exposes_app() -> None:
    """The `blockmodel.cli:app` entry point in pyproject.toml must resolve."""
    cli = importlib.import_module("blockmodel.cli")
    assert hasattr(cli, "app"), "blockmodel.cli must expose an 'app' Typer object."
