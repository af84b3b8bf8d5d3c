from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from analysis.engine import AnalysisResult, run_analysis
from catalog.loader import CatalogSnapshot, load_catalog
from rules.config import HelixMapConfig, load_config

MINI_SOLUTION = Path(__file__).parent / "fixtures" / "mini_solution"


@pytest.fixture
def mini_solution(tmp_path: Path) -> Path:
    """A writable copy of the mini solution (config + catalog)."""
    root = tmp_path / "solution"
    shutil.copytree(MINI_SOLUTION, root)
    return root


@pytest.fixture
def mini_snapshot() -> CatalogSnapshot:
    return load_catalog(MINI_SOLUTION / "templates.json")


@pytest.fixture
def mini_config() -> HelixMapConfig:
    return load_config(MINI_SOLUTION)


@pytest.fixture
def mini_result(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> AnalysisResult:
    return run_analysis(
        mini_snapshot.catalog,
        mini_config.layers,
        layout=mini_config.layout,
        title=mini_config.documentation.title,
    )
