from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    """Ensure ``accelstats`` is importable from a source checkout.

    The repository root is the package directory itself, so without an
    install the package only resolves when the checkout directory happens to
    be named ``accelstats``. Otherwise register it from the root ``__init__``.
    """
    if "accelstats" in sys.modules or importlib.util.find_spec("accelstats") is not None:
        return
    repo_root = Path(__file__).resolve().parents[1]
    spec = importlib.util.spec_from_file_location(
        "accelstats",
        repo_root / "__init__.py",
        submodule_search_locations=[str(repo_root)],
    )
    module = importlib.util.module_from_spec(spec)
    sys.modules["accelstats"] = module
    spec.loader.exec_module(module)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
