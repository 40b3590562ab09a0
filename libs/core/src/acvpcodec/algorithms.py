"""Static algorithm tables and the family/variant classifier.

Every ACVP algorithm name the codec understands is listed exactly once below,
together with the tags the family codecs branch on (underlying block cipher
and mode of operation). Names are matched exactly; anything else is rejected
with :class:`UnknownAlgorithm` rather than guessed from a substring.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Tuple

from .errors import UnknownAlgorithm


class AlgorithmFamily(enum.Enum):
    HASH = "hash"
    MSG_AUTH = "msgauth"
    BLOCK_CIPHER = "blkcipher"
    RNG = "drbg"


class CipherKind(enum.Enum):
    NONE = "none"
    AES = "AES"
    TDES = "TDES"


class Mode(enum.Enum):
    NONE = "none"
    ECB = "ECB"
    CBC = "CBC"
    CTR = "CTR"
    OFB = "OFB"
    CFB128 = "CFB128"
    XTS = "XTS"
    GCM = "GCM"
    GMAC = "GMAC"
    CCM = "CCM"
    HMAC = "HMAC"
    CMAC = "CMAC"


@dataclass(frozen=True)
class AlgorithmVariant:
    """Closed classification of one algorithm name, resolved once per group."""

    name: str
    family: AlgorithmFamily
    cipher: CipherKind = CipherKind.NONE
    mode: Mode = Mode.NONE


_HASHES: Tuple[str, ...] = (
    "SHA-1",
    "SHA-224",
    "SHA-256",
    "SHA-384",
    "SHA-512",
    "SHA2-224",
    "SHA2-256",
    "SHA2-384",
    "SHA2-512",
    "SHA2-512/224",
    "SHA2-512/256",
    "SHA3-224",
    "SHA3-256",
    "SHA3-384",
    "SHA3-512",
    "SHAKE-128",
    "SHAKE-256",
)

_MACS: Dict[str, Tuple[CipherKind, Mode]] = {
    "HMAC-SHA-1": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA2-224": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA2-256": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA2-384": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA2-512": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA3-224": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA3-256": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA3-384": (CipherKind.NONE, Mode.HMAC),
    "HMAC-SHA3-512": (CipherKind.NONE, Mode.HMAC),
    "CMAC-AES": (CipherKind.AES, Mode.CMAC),
    "CMAC-TDES": (CipherKind.TDES, Mode.CMAC),
    "ACVP-AES-GCM": (CipherKind.AES, Mode.GCM),
    "ACVP-AES-GMAC": (CipherKind.AES, Mode.GMAC),
    "ACVP-AES-CCM": (CipherKind.AES, Mode.CCM),
}

_BLKCIPHERS: Dict[str, Tuple[CipherKind, Mode]] = {
    "ACVP-AES-ECB": (CipherKind.AES, Mode.ECB),
    "ACVP-AES-CBC": (CipherKind.AES, Mode.CBC),
    "ACVP-AES-CTR": (CipherKind.AES, Mode.CTR),
    "ACVP-AES-OFB": (CipherKind.AES, Mode.OFB),
    "ACVP-AES-CFB128": (CipherKind.AES, Mode.CFB128),
    "ACVP-AES-XTS": (CipherKind.AES, Mode.XTS),
    "ACVP-TDES-ECB": (CipherKind.TDES, Mode.ECB),
    "ACVP-TDES-CBC": (CipherKind.TDES, Mode.CBC),
}

_RNGS: Tuple[str, ...] = ("hashDRBG", "ctrDRBG", "hmacDRBG")

HASH_NAMES: FrozenSet[str] = frozenset(_HASHES)
MAC_NAMES: FrozenSet[str] = frozenset(_MACS)
BLKCIPHER_NAMES: FrozenSet[str] = frozenset(_BLKCIPHERS)
RNG_NAMES: FrozenSet[str] = frozenset(_RNGS)


def _build_variants() -> Mapping[str, AlgorithmVariant]:
    table: Dict[str, AlgorithmVariant] = {}
    for name in _HASHES:
        table[name] = AlgorithmVariant(name, AlgorithmFamily.HASH)
    for name, (cipher, mode) in _MACS.items():
        table[name] = AlgorithmVariant(name, AlgorithmFamily.MSG_AUTH, cipher, mode)
    for name, (cipher, mode) in _BLKCIPHERS.items():
        table[name] = AlgorithmVariant(name, AlgorithmFamily.BLOCK_CIPHER, cipher, mode)
    for name in _RNGS:
        table[name] = AlgorithmVariant(name, AlgorithmFamily.RNG)
    return table


_VARIANTS = _build_variants()

# The four tables must stay disjoint or classification would depend on order.
assert len(_VARIANTS) == len(_HASHES) + len(_MACS) + len(_BLKCIPHERS) + len(_RNGS)


def variant(algorithm: str) -> AlgorithmVariant:
    """Return the tagged variant for `algorithm`.

    Raises :class:`UnknownAlgorithm` for names outside the static tables.
    """
    found = _VARIANTS.get(algorithm)
    if found is None:
        raise UnknownAlgorithm(f"Unknown type for algorithm '{algorithm}'")
    return found


def classify(algorithm: str) -> AlgorithmFamily:
    if algorithm in HASH_NAMES:
        return AlgorithmFamily.HASH
    if algorithm in MAC_NAMES:
        return AlgorithmFamily.MSG_AUTH
    if algorithm in BLKCIPHER_NAMES:
        return AlgorithmFamily.BLOCK_CIPHER
    if algorithm in RNG_NAMES:
        return AlgorithmFamily.RNG
    raise UnknownAlgorithm(f"Unknown type for algorithm '{algorithm}'")


def names_by_family() -> Dict[AlgorithmFamily, Tuple[str, ...]]:
    out: Dict[AlgorithmFamily, Tuple[str, ...]] = {}
    for family in AlgorithmFamily:
        out[family] = tuple(v.name for v in _VARIANTS.values() if v.family is family)
    return out


__all__ = [
    "AlgorithmFamily",
    "AlgorithmVariant",
    "CipherKind",
    "Mode",
    "HASH_NAMES",
    "MAC_NAMES",
    "BLKCIPHER_NAMES",
    "RNG_NAMES",
    "classify",
    "variant",
    "names_by_family",
]
