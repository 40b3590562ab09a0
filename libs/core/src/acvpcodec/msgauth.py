from __future__ import annotations

"""MAC and AEAD test cases (HMAC, CMAC, GCM, GMAC, CCM).

The wire schema for this family is the least regular one: the message may be
carried under any of six keys, the tag under two, and CCM decrypt vectors
omit the tag field altogether and append the tag to the ciphertext instead.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .algorithms import AlgorithmFamily, CipherKind, Mode
from .context import Direction, GroupContext, IVMode
from .errors import InvalidDirectionForFamily
from .interfaces import AcvpTestCase, RandomSource
from .registry import codecs
from .util import bin2hex, get_acvp_hex, get_acvp_u32

log = logging.getLogger(__name__)

# First key present wins.
MESSAGE_KEYS = ("msg", "message", "plainText", "cipherText", "pt", "ct")
TAG_KEYS = ("tag", "mac")


@dataclass
class MsgAuthOutput:
    """AEAD encrypt output: ciphertext and tag as separate buffers."""

    out: bytes
    tag: bytes


def _first_hex(test: Mapping[str, Any], keys) -> bytes | None:
    for key in keys:
        if key in test:
            return get_acvp_hex(key, test)
    return None


@codecs.register(AlgorithmFamily.MSG_AUTH)
class MsgAuth(AcvpTestCase):
    family = AlgorithmFamily.MSG_AUTH

    def __init__(
        self,
        tcid: int,
        ctx: GroupContext,
        *,
        key: bytes = b"",
        key1: bytes = b"",
        key2: bytes = b"",
        key3: bytes = b"",
        iv: bytes = b"",
        msg: bytes = b"",
        aad: bytes = b"",
        tag: bytes = b"",
    ) -> None:
        super().__init__(tcid, ctx)
        self.key = key
        self.key1 = key1
        self.key2 = key2
        self.key3 = key3
        self.iv = iv
        self.msg = msg
        self.aad = aad
        self.tag = tag

    @property
    def direction(self) -> Direction:
        return self.ctx.direction

    @property
    def ivmode(self) -> IVMode:
        return self.ctx.ivmode

    @classmethod
    def decode(
        cls,
        test: Mapping[str, Any],
        ctx: GroupContext,
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> "MsgAuth":
        tcid = get_acvp_u32("tcId", test)

        msg = _first_hex(test, MESSAGE_KEYS) or b""
        aad = get_acvp_hex("aad", test) if "aad" in test else b""
        key = get_acvp_hex("key", test) if "key" in test else b""

        key1 = key2 = key3 = b""
        if "key1" in test and "key2" in test and "key3" in test:
            key1 = get_acvp_hex("key1", test)
            key2 = get_acvp_hex("key2", test)
            key3 = get_acvp_hex("key3", test)

        if "iv" in test:
            iv = get_acvp_hex("iv", test)
        elif ctx.ivmode is IVMode.INTERNAL:
            iv = random_bytes(ctx.ivlen)
            log.debug("tcId %d: generated %d byte internal IV", tcid, ctx.ivlen)
        else:
            iv = b""

        tag = _first_hex(test, TAG_KEYS)
        if tag is None:
            tag = b""
            # CCM decrypt vectors carry ciphertext || tag under the message key.
            if ctx.direction is Direction.DECRYPT:
                if ctx.payload_len == 0:
                    msg, tag = b"", msg
                else:
                    msg, tag = msg[: ctx.payload_len], msg[ctx.payload_len :]
                log.debug("tcId %d: split %d byte tag off the payload", tcid, len(tag))

        return cls(tcid, ctx, key=key, key1=key1, key2=key2, key3=key3, iv=iv, msg=msg, aad=aad, tag=tag)

    def encode(self, result: Any) -> Dict[str, Any]:
        if isinstance(result, bool):
            return {"tcId": self.tcid, "testPassed": result}
        if isinstance(result, MsgAuthOutput):
            return self.aead_result(result)
        if isinstance(result, (bytes, bytearray)):
            return self.raw_result(bytes(result))
        raise self._unsupported(result)

    def raw_result(self, result: bytes) -> Dict[str, Any]:
        variant = self.ctx.variant
        res: Dict[str, Any] = {"tcId": self.tcid}
        if variant.mode in (Mode.HMAC, Mode.CMAC) or variant.cipher is CipherKind.TDES:
            res["mac"] = bin2hex(result)
        elif variant.mode is Mode.GMAC:
            res["tag"] = bin2hex(result)
        elif variant.mode is Mode.GCM:
            res["pt"] = bin2hex(result)
        elif self.direction in (Direction.DECRYPT, Direction.VERIFY):
            res["pt"] = bin2hex(result)
        elif self.direction in (Direction.ENCRYPT, Direction.GENERATE):
            res["ct"] = bin2hex(result)
        else:
            raise InvalidDirectionForFamily("Invalid direction for MsgAuth algorithm")
        return res

    def aead_result(self, result: MsgAuthOutput) -> Dict[str, Any]:
        res: Dict[str, Any] = {"tcId": self.tcid}
        if self.ivmode is IVMode.INTERNAL:
            res["iv"] = bin2hex(self.iv)
        if self.ctx.variant.mode is Mode.CCM:
            res["ct"] = bin2hex(result.out + result.tag)
        else:
            res["ct"] = bin2hex(result.out)
            res["tag"] = bin2hex(result.tag)
        return res


__all__ = ["MESSAGE_KEYS", "TAG_KEYS", "MsgAuthOutput", "MsgAuth"]
