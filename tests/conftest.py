from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from paramset.core.adapters.filestore import JsonFileHost  # noqa: E402
from paramset.core.models import ParameterDefinition  # noqa: E402


@pytest.fixture
def host(tmp_path: Path) -> JsonFileHost:
    """A file store with job `folder/deploy` (params A, C) and run #1."""
    store = JsonFileHost(tmp_path / "state")
    job = store.create_job(
        "folder/deploy",
        [ParameterDefinition("A", "old"), ParameterDefinition("C", "c0")],
    )
    store.create_run(job)
    return store
