from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from .algorithms import AlgorithmFamily, CipherKind
from .context import Direction, GroupContext
from .errors import InvalidDirectionForFamily
from .interfaces import AcvpTestCase, RandomSource
from .registry import codecs
from .util import bin2hex, get_acvp_hex, get_acvp_u32

log = logging.getLogger(__name__)


@dataclass
class BlkCipherMCTOutput:
    """Key material, IV, input and output of one Monte Carlo iteration."""

    key: bytes = b""
    key1: bytes = b""
    key2: bytes = b""
    key3: bytes = b""
    iv: bytes = b""
    inp: bytes = b""
    out: bytes = b""

    @classmethod
    def new_aes(cls, key: bytes, iv: bytes, inp: bytes, out: bytes) -> "BlkCipherMCTOutput":
        return cls(key=key, iv=iv, inp=inp, out=out)

    @classmethod
    def new_tdes(
        cls, key1: bytes, key2: bytes, key3: bytes, iv: bytes, inp: bytes, out: bytes
    ) -> "BlkCipherMCTOutput":
        return cls(key1=key1, key2=key2, key3=key3, iv=iv, inp=inp, out=out)


@codecs.register(AlgorithmFamily.BLOCK_CIPHER)
class BlockCipher(AcvpTestCase):
    family = AlgorithmFamily.BLOCK_CIPHER

    def __init__(
        self,
        tcid: int,
        ctx: GroupContext,
        *,
        iv: bytes = b"",
        input: bytes = b"",
        key: bytes = b"",
        key1: bytes = b"",
        key2: bytes = b"",
        key3: bytes = b"",
    ) -> None:
        super().__init__(tcid, ctx)
        self.iv = iv
        self.input = input
        self.key = key
        self.key1 = key1
        self.key2 = key2
        self.key3 = key3

    @property
    def direction(self) -> Direction:
        return self.ctx.direction

    @classmethod
    def decode(
        cls,
        test: Mapping[str, Any],
        ctx: GroupContext,
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> "BlockCipher":
        tcid = get_acvp_u32("tcId", test)

        iv = b""
        if "iv" in test:
            iv = get_acvp_hex("iv", test)
        elif "tweakValue" in test:
            iv = get_acvp_hex("tweakValue", test)

        key = key1 = key2 = key3 = b""
        if "key1" in test and "key2" in test and "key3" in test:
            key1 = get_acvp_hex("key1", test)
            key2 = get_acvp_hex("key2", test)
            key3 = get_acvp_hex("key3", test)
            key = key1 + key2 + key3
        elif "key" in test:
            key = get_acvp_hex("key", test)

        if ctx.direction is Direction.ENCRYPT:
            input = get_acvp_hex("pt", test)
        elif ctx.direction is Direction.DECRYPT:
            input = get_acvp_hex("ct", test)
        else:
            raise InvalidDirectionForFamily("Invalid direction for block cipher operation")

        return cls(tcid, ctx, iv=iv, input=input, key=key, key1=key1, key2=key2, key3=key3)

    def encode(self, result: Any) -> Dict[str, Any]:
        if isinstance(result, (bytes, bytearray)):
            return self.aft_result(bytes(result))
        if isinstance(result, list) and all(isinstance(r, BlkCipherMCTOutput) for r in result):
            return self.mct_result(result)
        raise self._unsupported(result)

    def aft_result(self, out: bytes) -> Dict[str, Any]:
        res: Dict[str, Any] = {"tcId": self.tcid}
        if self.direction is Direction.DECRYPT:
            res["pt"] = bin2hex(out)
        elif self.direction is Direction.ENCRYPT:
            res["ct"] = bin2hex(out)
        return res

    def mct_result(self, outputs: Sequence[BlkCipherMCTOutput]) -> Dict[str, Any]:
        cipher = self.ctx.variant.cipher
        results: List[Dict[str, Any]] = []
        for out in outputs:
            res: Dict[str, Any] = {}
            if cipher is CipherKind.AES:
                res["key"] = bin2hex(out.key)
            if out.iv:
                res["iv"] = bin2hex(out.iv)
            if self.direction is Direction.DECRYPT:
                res["pt"] = bin2hex(out.out)
                res["ct"] = bin2hex(out.inp)
            elif self.direction is Direction.ENCRYPT:
                res["pt"] = bin2hex(out.inp)
                res["ct"] = bin2hex(out.out)
            if cipher is CipherKind.TDES:
                res["key1"] = bin2hex(out.key1)
                res["key2"] = bin2hex(out.key2)
                res["key3"] = bin2hex(out.key3)
            results.append(res)
        log.debug("tcId %d: encoded %d MCT iterations", self.tcid, len(results))
        return {"tcId": self.tcid, "resultsArray": results}


__all__ = ["BlkCipherMCTOutput", "BlockCipher"]
