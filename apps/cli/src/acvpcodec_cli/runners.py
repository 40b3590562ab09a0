from __future__ import annotations
"""Engine bootstrap and the decode -> compute -> encode loop used by the CLI."""

import itertools
import pathlib
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List

from cryptography.hazmat.primitives import hashes

from acvpcodec import AcvpRequest, UnsupportedOperation, engines, parse_request
from acvpcodec.interfaces import CryptoEngine, RandomSource

_HERE = pathlib.Path(__file__).resolve()

try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

_ADAPTER_PATHS = {
    "acvpcodec_cryptography": _PROJECT_ROOT / "libs" / "adapters" / "cryptography" / "src",
}

_ENGINE_INSTANCE_CACHE: Dict[str, Any] = {}


def _load_engines() -> None:
    import importlib
    import importlib.util
    for mod in _ADAPTER_PATHS:
        spec = importlib.util.find_spec(mod)
        if spec is None:
            candidate = _ADAPTER_PATHS[mod]
            if candidate.exists() and str(candidate) not in sys.path:
                sys.path.append(str(candidate))
            spec = importlib.util.find_spec(mod)
        if spec is None:
            continue
        importlib.import_module(mod)


def get_engine(name: str) -> CryptoEngine:
    _load_engines()
    engine = _ENGINE_INSTANCE_CACHE.get(name)
    if engine is None:
        engine = engines.get(name)()
        _ENGINE_INSTANCE_CACHE[name] = engine
    return engine


def seeded_random(seed: bytes) -> RandomSource:
    """Deterministic byte source: SHAKE-256(seed || counter) per draw."""
    counter = itertools.count()

    def _draw(n: int) -> bytes:
        if n == 0:
            return b""
        h = hashes.Hash(hashes.SHAKE256(n))
        h.update(seed + next(counter).to_bytes(8, "big"))
        return h.finalize()

    return _draw


@dataclass
class EngineTally:
    cases: int = 0
    solved: int = 0
    unsupported: int = 0
    unsupported_examples: List[Dict[str, Any]] = field(default_factory=list)

    def record(self, tgid: int, tcid: int, exc: UnsupportedOperation | None) -> None:
        self.cases += 1
        if exc is None:
            self.solved += 1
            return
        self.unsupported += 1
        if len(self.unsupported_examples) < 3:
            self.unsupported_examples.append({"tgId": tgid, "tcId": tcid, "reason": exc.message})


def solve(request: AcvpRequest[Any], engine: CryptoEngine) -> EngineTally:
    """Run `engine` over every test of `request`, setting each result."""
    tally = EngineTally()
    for group, test in request.iter_tests():
        try:
            result = engine.compute(test.get_test_data(), group.context)
        except UnsupportedOperation as exc:
            tally.record(group.tgid, test.tcid, exc)
            continue
        test.set_result(result)
        tally.record(group.tgid, test.tcid, None)
    return tally


def load_request(path: pathlib.Path, random_bytes: RandomSource | None = None) -> AcvpRequest[Any]:
    data = path.read_bytes()
    if random_bytes is None:
        return parse_request(data)
    return parse_request(data, random_bytes=random_bytes)
