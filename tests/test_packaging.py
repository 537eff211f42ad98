from pathlib import Path

import pytest

import config

ROOT = Path(__file__).resolve().parent.parent


def test_default_paths_point_into_the_checkout():
    assert config.ROOT_DIR == ROOT
    assert config.DATA_PATH == ROOT / "data" / "insurance_claims.csv"
    assert config.OUTPUT_DIR == ROOT / "outputs"


def test_install_ships_no_top_level_modules_or_scripts():
    tomllib = pytest.importorskip("tomllib")
    with open(ROOT / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)

    assert "scripts" not in pyproject["project"]
    assert pyproject["tool"]["setuptools"]["py-modules"] == []
    assert pyproject["tool"]["setuptools"]["packages"] == []
