from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
CLI_SRC = ROOT / "apps" / "cli" / "src"
CORE_SRC = ROOT / "libs" / "core" / "src"
ENGINE_SRC = ROOT / "libs" / "adapters" / "cryptography" / "src"

for candidate in (CLI_SRC, CORE_SRC, ENGINE_SRC):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)


def _vector_set(
    algorithm: str,
    groups: List[Dict[str, Any]],
    *,
    version: str = "1.0",
    vsid: int = 42,
    revision: str = "1.0",
    is_sample: bool = True,
) -> List[Dict[str, Any]]:
    return [
        {"acvVersion": version},
        {
            "vsId": vsid,
            "algorithm": algorithm,
            "revision": revision,
            "isSample": is_sample,
            "testGroups": groups,
        },
    ]


@pytest.fixture
def vector_set():
    """Factory for a two-entry ACVP request document."""
    return _vector_set
