from __future__ import annotations
from typing import Any, Callable, Dict, Hashable

from .errors import AcvpError


class _Registry:
    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._items: Dict[Hashable, Any] = {}

    def register(self, *keys: Hashable) -> Callable[[Any], Any]:
        def _inner(cls_or_obj: Any) -> Any:
            for key in keys:
                self._items[key] = cls_or_obj
            return cls_or_obj
        return _inner

    def get(self, key: Hashable) -> Any:
        try:
            return self._items[key]
        except KeyError:
            raise AcvpError(f"No {self.kind} registered for '{key}'") from None


# AlgorithmFamily -> AcvpTestCase subclass; filled in by the family modules.
codecs = _Registry("codec")

# engine name -> CryptoEngine factory; filled in by adapter packages.
engines = _Registry("engine")
