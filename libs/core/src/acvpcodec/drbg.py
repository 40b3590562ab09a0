from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .algorithms import AlgorithmFamily
from .context import GroupContext
from .errors import MissingRequiredField, WrongFieldType
from .interfaces import AcvpTestCase, RandomSource
from .registry import codecs
from .util import bin2hex, get_acvp_hex, get_acvp_str, get_acvp_u32


@dataclass
class DrbgOtherInput:
    """One `otherInput` step: reseed or generate, with its extra inputs."""

    intended_use: str
    additional_input: bytes
    entropy_input: bytes

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "DrbgOtherInput":
        return cls(
            intended_use=get_acvp_str("intendedUse", obj),
            additional_input=get_acvp_hex("additionalInput", obj),
            entropy_input=get_acvp_hex("entropyInput", obj),
        )


@codecs.register(AlgorithmFamily.RNG)
class Drbg(AcvpTestCase):
    family = AlgorithmFamily.RNG

    def __init__(
        self,
        tcid: int,
        ctx: GroupContext,
        *,
        entropy_input: bytes = b"",
        nonce: bytes = b"",
        perso_string: bytes = b"",
        other_input: List[DrbgOtherInput] | None = None,
    ) -> None:
        super().__init__(tcid, ctx)
        self.entropy_input = entropy_input
        self.nonce = nonce
        self.perso_string = perso_string
        self.other_input = other_input if other_input is not None else []

    @classmethod
    def decode(
        cls,
        test: Mapping[str, Any],
        ctx: GroupContext,
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> "Drbg":
        tcid = get_acvp_u32("tcId", test)
        entropy_input = get_acvp_hex("entropyInput", test)
        nonce = get_acvp_hex("nonce", test)
        perso_string = get_acvp_hex("persoString", test)

        if "otherInput" not in test:
            raise MissingRequiredField("otherInput", "Required key 'otherInput' is missing")
        oi = test["otherInput"]
        if not isinstance(oi, list):
            raise WrongFieldType("otherInput", "other input for DRBG vector is not an array")
        other_input = [DrbgOtherInput.from_json(inp) for inp in oi]

        return cls(
            tcid,
            ctx,
            entropy_input=entropy_input,
            nonce=nonce,
            perso_string=perso_string,
            other_input=other_input,
        )

    def encode(self, result: Any) -> Dict[str, Any]:
        if not isinstance(result, (bytes, bytearray)):
            raise self._unsupported(result)
        return {"tcId": self.tcid, "returnedBits": bin2hex(result)}


__all__ = ["DrbgOtherInput", "Drbg"]
