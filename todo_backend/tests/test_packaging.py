import tomllib
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]


class TestPackaging:
    def test_package_discovery_uses_namespaces(self):
        with open(ROOT / "pyproject.toml", "rb") as fh:
            pyproject = tomllib.load(fh)
        find = pyproject["tool"]["setuptools"]["packages"]["find"]
        assert find["namespaces"] is True
        assert find["where"] == ["todo_backend"]

    def test_all_api_packages_are_discovered(self):
        setuptools = pytest.importorskip("setuptools")
        found = setuptools.find_namespace_packages(where=str(ROOT / "todo_backend"), include=["src*"])
        assert "src.api" in found
        assert "src.api.routers" in found
