
from .errors import (
    AcvpError,
    MalformedDocument,
    FieldError,
    MissingRequiredField,
    WrongFieldType,
    InvalidHexString,
    InvalidEnumValue,
    UnknownAlgorithm,
    UnsetResult,
    InvalidDirectionForFamily,
    UnsupportedOperation,
)
from .algorithms import AlgorithmFamily, AlgorithmVariant, CipherKind, Mode, classify, variant
from .context import Direction, DrbgMode, GroupContext, IVMode, TestType, build_group_context
from .interfaces import AcvpTestCase, CryptoEngine
from .registry import codecs, engines
from .blkcipher import BlkCipherMCTOutput, BlockCipher
from .hash import SecureHash
from .drbg import Drbg, DrbgOtherInput
from .msgauth import MsgAuth, MsgAuthOutput
from .parser import AcvpRequest, AcvpTest, AcvpTestGroup, parse_request
from .util import bin2hex, get_algorithm_type, hex2bin

__all__ = [
    "AcvpError",
    "MalformedDocument",
    "FieldError",
    "MissingRequiredField",
    "WrongFieldType",
    "InvalidHexString",
    "InvalidEnumValue",
    "UnknownAlgorithm",
    "UnsetResult",
    "InvalidDirectionForFamily",
    "UnsupportedOperation",
    "AlgorithmFamily",
    "AlgorithmVariant",
    "CipherKind",
    "Mode",
    "classify",
    "variant",
    "Direction",
    "DrbgMode",
    "GroupContext",
    "IVMode",
    "TestType",
    "build_group_context",
    "AcvpTestCase",
    "CryptoEngine",
    "codecs",
    "engines",
    "BlkCipherMCTOutput",
    "BlockCipher",
    "SecureHash",
    "Drbg",
    "DrbgOtherInput",
    "MsgAuth",
    "MsgAuthOutput",
    "AcvpRequest",
    "AcvpTest",
    "AcvpTestGroup",
    "parse_request",
    "bin2hex",
    "get_algorithm_type",
    "hex2bin",
]
