"""Tests for declared package metadata."""
from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _dependencies() -> dict[str, str]:
    with open(PYPROJECT, "rb") as f:
        project = tomllib.load(f)["project"]
    deps = {}
    for spec in project["dependencies"]:
        name = spec.split(">")[0].split("<")[0].split("=")[0].strip()
        deps[name] = spec
    return deps


def test_mcp_stays_on_fastmcp_series():
    # clicker.mcp.server imports mcp.server.fastmcp, which 2.x removed
    assert "<2" in _dependencies()["mcp"]


def test_fastmcp_import_available():
    from mcp.server.fastmcp import FastMCP

    assert FastMCP is not None
