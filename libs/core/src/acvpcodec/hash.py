from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Sequence

from .algorithms import AlgorithmFamily
from .context import GroupContext
from .interfaces import AcvpTestCase, RandomSource
from .registry import codecs
from .util import bin2hex, get_acvp_hex, get_acvp_u32


@codecs.register(AlgorithmFamily.HASH)
class SecureHash(AcvpTestCase):
    family = AlgorithmFamily.HASH

    def __init__(self, tcid: int, ctx: GroupContext, *, msg: bytes = b"") -> None:
        super().__init__(tcid, ctx)
        self.msg = msg

    @classmethod
    def decode(
        cls,
        test: Mapping[str, Any],
        ctx: GroupContext,
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> "SecureHash":
        return cls(get_acvp_u32("tcId", test), ctx, msg=get_acvp_hex("msg", test))

    def encode(self, result: Any) -> Dict[str, Any]:
        if isinstance(result, (bytes, bytearray)):
            return self.aft_result(bytes(result))
        if isinstance(result, list) and all(isinstance(r, (bytes, bytearray)) for r in result):
            return self.mct_result(result)
        raise self._unsupported(result)

    def aft_result(self, md: bytes) -> Dict[str, Any]:
        return {"tcId": self.tcid, "md": bin2hex(md)}

    def mct_result(self, mds: Sequence[bytes]) -> Dict[str, Any]:
        return {
            "tcId": self.tcid,
            "resultsArray": [{"md": bin2hex(md)} for md in mds],
        }


__all__ = ["SecureHash"]
