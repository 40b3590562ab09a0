from __future__ import annotations

"""Codec and engine contracts.

Family codecs subclass :class:`AcvpTestCase`; the containers in
:mod:`acvpcodec.parser` only ever talk to this base class. Crypto engines
implement :class:`CryptoEngine` and never see JSON, only decoded test cases.
"""

import copy
import os
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Protocol

from .algorithms import AlgorithmFamily
from .context import GroupContext
from .errors import UnsetResult
from .util import dump_json, pretty_json

RandomSource = Callable[[int], bytes]


class AcvpTestCase:
    """One decoded test case plus its write-once result slot.

    Subclasses implement :meth:`decode` (JSON -> typed fields) and
    :meth:`encode` (engine result -> response JSON). The slot holds ``None``
    until :meth:`set_result` succeeds, so an unset result can never be
    mistaken for an empty response object.
    """

    family: ClassVar[AlgorithmFamily]

    def __init__(self, tcid: int, ctx: GroupContext) -> None:
        self.tcid = tcid
        self.ctx = ctx
        self._result: Optional[Dict[str, Any]] = None

    @classmethod
    def decode(
        cls,
        test: Mapping[str, Any],
        ctx: GroupContext,
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> "AcvpTestCase":
        raise NotImplementedError

    def encode(self, result: Any) -> Dict[str, Any]:
        raise NotImplementedError

    def _unsupported(self, result: Any) -> TypeError:
        return TypeError(f"{type(self).__name__} cannot encode a result of type {type(result).__name__}")

    def set_result(self, result: Any) -> None:
        self._result = self.encode(result)

    @property
    def has_result(self) -> bool:
        return self._result is not None

    def get_result(self) -> Dict[str, Any]:
        if self._result is None:
            raise UnsetResult("The result is not yet set, call set_result")
        return copy.deepcopy(self._result)

    def dump_result(self) -> str:
        return dump_json(self.get_result())

    def pretty_result(self, indent: Optional[int] = None) -> str:
        return pretty_json(self.get_result(), indent)


class CryptoEngine(Protocol):
    """Computes results for decoded test cases.

    `compute` returns one of: bytes, a list of bytes (hash MCT), a list of
    :class:`~acvpcodec.blkcipher.BlkCipherMCTOutput`, a
    :class:`~acvpcodec.msgauth.MsgAuthOutput` or a bool (verification).
    """

    name: str

    def supports(self, algorithm: str) -> bool: ...
    def compute(self, case: AcvpTestCase, ctx: GroupContext) -> Any: ...


__all__ = ["RandomSource", "AcvpTestCase", "CryptoEngine"]
