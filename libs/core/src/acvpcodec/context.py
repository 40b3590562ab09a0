"""Per-group decode context.

A test group's JSON carries the parameters every test case in the group shares
(direction, tag and IV lengths, DRBG options). They are resolved once into an
immutable :class:`GroupContext` that each test-case decode reads from.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping

from .algorithms import AlgorithmVariant, variant
from .errors import InvalidEnumValue
from .util import get_acvp_bool, get_acvp_str, get_acvp_u32


class _Literal(enum.Enum):
    """Enum whose members are matched against exact ACVP string literals."""

    @classmethod
    def from_string(cls, literal: str):
        for member in cls:
            if member.value == literal:
                return member
        raise InvalidEnumValue(f"Invalid {cls.__name__} '{literal}'")


class TestType(_Literal):
    __test__ = False

    AFT = "AFT"
    CTR = "CTR"
    MCT = "MCT"
    LDT = "LDT"


class Direction(_Literal):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    GENERATE = "gen"
    VERIFY = "ver"
    NONE = None


class IVMode(_Literal):
    INTERNAL = "internal"
    EXTERNAL = "external"
    NONE = None


class DrbgMode(_Literal):
    SHA1 = "SHA-1"
    SHA224 = "SHA2-224"
    SHA256 = "SHA2-256"
    SHA384 = "SHA2-384"
    SHA512 = "SHA2-512"
    SHA512_224 = "SHA2-512/224"
    SHA512_256 = "SHA2-512/256"
    AES128 = "AES-128"
    AES192 = "AES-192"
    AES256 = "AES-256"
    TDES = "TDES"
    NONE = None


@dataclass(frozen=True)
class GroupContext:
    algorithm: str
    variant: AlgorithmVariant
    tgid: int
    test_type: TestType
    direction: Direction = Direction.NONE
    # AEAD / MAC
    taglen: int = 0
    payload_len: int = 0
    ivmode: IVMode = IVMode.NONE
    ivlen: int = 0
    # DRBG
    drbgmode: DrbgMode = DrbgMode.NONE
    prediction_resistance: bool = False
    der_func: bool = False
    reseed: bool = False
    returned_bits_len: int = 0


def _bits_to_bytes(key: str, tg: Mapping[str, Any]) -> int:
    return get_acvp_u32(key, tg) // 8


def build_group_context(tg: Mapping[str, Any], algorithm: str) -> GroupContext:
    """Resolve the shared parameters of one test group.

    `tgId` and `testType` are required. Every other field is optional and
    defaults independently; lengths given in bits on the wire are stored in
    bytes.
    """
    tgid = get_acvp_u32("tgId", tg)
    test_type = TestType.from_string(get_acvp_str("testType", tg))

    direction = Direction.NONE
    if "direction" in tg:
        direction = Direction.from_string(get_acvp_str("direction", tg))

    taglen = 0
    if "tagLen" in tg:
        taglen = _bits_to_bytes("tagLen", tg)
    elif "macLen" in tg:
        taglen = _bits_to_bytes("macLen", tg)

    payload_len = _bits_to_bytes("payloadLen", tg) if "payloadLen" in tg else 0

    ivmode = IVMode.NONE
    if "ivGen" in tg:
        ivmode = IVMode.from_string(get_acvp_str("ivGen", tg))
    ivlen = _bits_to_bytes("ivLen", tg) if "ivLen" in tg else 0

    drbgmode = DrbgMode.NONE
    if "mode" in tg:
        drbgmode = DrbgMode.from_string(get_acvp_str("mode", tg))

    return GroupContext(
        algorithm=algorithm,
        variant=variant(algorithm),
        tgid=tgid,
        test_type=test_type,
        direction=direction,
        taglen=taglen,
        payload_len=payload_len,
        ivmode=ivmode,
        ivlen=ivlen,
        drbgmode=drbgmode,
        prediction_resistance=get_acvp_bool("predResistance", tg) if "predResistance" in tg else False,
        der_func=get_acvp_bool("derFunc", tg) if "derFunc" in tg else False,
        reseed=get_acvp_bool("reSeed", tg) if "reSeed" in tg else False,
        returned_bits_len=_bits_to_bytes("returnedBitsLen", tg) if "returnedBitsLen" in tg else 0,
    )


__all__ = [
    "TestType",
    "Direction",
    "IVMode",
    "DrbgMode",
    "GroupContext",
    "build_group_context",
]
