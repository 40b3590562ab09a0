from __future__ import annotations

"""Thin wrappers over `cryptography` primitives, keyed by ACVP names."""

from typing import Callable, Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import cmac, constant_time, hashes, hmac
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESCCM

from acvpcodec import DrbgMode, Mode, UnsupportedOperation

_HASHES: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "SHA-1": hashes.SHA1,
    "SHA-224": hashes.SHA224,
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
    "SHA2-224": hashes.SHA224,
    "SHA2-256": hashes.SHA256,
    "SHA2-384": hashes.SHA384,
    "SHA2-512": hashes.SHA512,
    "SHA2-512/224": hashes.SHA512_224,
    "SHA2-512/256": hashes.SHA512_256,
    "SHA3-224": hashes.SHA3_224,
    "SHA3-256": hashes.SHA3_256,
    "SHA3-384": hashes.SHA3_384,
    "SHA3-512": hashes.SHA3_512,
}

_DRBG_HASHES: Dict[DrbgMode, str] = {
    DrbgMode.SHA1: "SHA-1",
    DrbgMode.SHA224: "SHA2-224",
    DrbgMode.SHA256: "SHA2-256",
    DrbgMode.SHA384: "SHA2-384",
    DrbgMode.SHA512: "SHA2-512",
    DrbgMode.SHA512_224: "SHA2-512/224",
    DrbgMode.SHA512_256: "SHA2-512/256",
}

HASH_NAMES = frozenset(_HASHES)


def hash_algorithm(name: str) -> hashes.HashAlgorithm:
    factory = _HASHES.get(name)
    if factory is None:
        raise UnsupportedOperation(f"Hash '{name}' is not supported by the cryptography engine")
    return factory()


def hmac_hash_name(algorithm: str) -> str:
    """`HMAC-SHA2-256` -> `SHA2-256`."""
    return algorithm[len("HMAC-"):]


def drbg_hash_name(mode: DrbgMode) -> str:
    name = _DRBG_HASHES.get(mode)
    if name is None:
        raise UnsupportedOperation(f"DRBG mode '{mode.value}' has no HMAC_DRBG hash")
    return name


def digest(name: str, data: bytes) -> bytes:
    h = hashes.Hash(hash_algorithm(name))
    h.update(data)
    return h.finalize()


def hmac_digest(name: str, key: bytes, data: bytes) -> bytes:
    h = hmac.HMAC(key, hash_algorithm(name))
    h.update(data)
    return h.finalize()


def cmac_aes(key: bytes, data: bytes) -> bytes:
    c = cmac.CMAC(algorithms.AES(key))
    c.update(data)
    return c.finalize()


def bytes_eq(a: bytes, b: bytes) -> bool:
    return constant_time.bytes_eq(a, b)


def _aes_mode(mode: Mode, iv: bytes) -> modes.Mode:
    if mode is Mode.ECB:
        return modes.ECB()
    if mode is Mode.CBC:
        return modes.CBC(iv)
    if mode is Mode.CTR:
        return modes.CTR(iv)
    if mode is Mode.OFB:
        return modes.OFB(iv)
    if mode is Mode.CFB128:
        return modes.CFB(iv)
    raise UnsupportedOperation(f"AES mode '{mode.value}' is not supported by the cryptography engine")


def aes_context(mode: Mode, key: bytes, iv: bytes, encrypt: bool):
    cipher = Cipher(algorithms.AES(key), _aes_mode(mode, iv))
    return cipher.encryptor() if encrypt else cipher.decryptor()


def aes_crypt(mode: Mode, key: bytes, iv: bytes, data: bytes, encrypt: bool) -> bytes:
    ctx = aes_context(mode, key, iv, encrypt)
    return ctx.update(data) + ctx.finalize()


def gcm_encrypt(key: bytes, iv: bytes, pt: bytes, aad: bytes, taglen: int) -> tuple[bytes, bytes]:
    enc = Cipher(algorithms.AES(key), modes.GCM(iv)).encryptor()
    enc.authenticate_additional_data(aad)
    ct = enc.update(pt) + enc.finalize()
    return ct, enc.tag[:taglen or len(enc.tag)]


def gcm_decrypt(key: bytes, iv: bytes, ct: bytes, aad: bytes, tag: bytes) -> bytes | None:
    dec = Cipher(algorithms.AES(key), modes.GCM(iv, tag, min_tag_length=len(tag))).decryptor()
    dec.authenticate_additional_data(aad)
    try:
        return dec.update(ct) + dec.finalize()
    except InvalidTag:
        return None


def ccm_encrypt(key: bytes, nonce: bytes, pt: bytes, aad: bytes, taglen: int) -> tuple[bytes, bytes]:
    sealed = AESCCM(key, tag_length=taglen).encrypt(nonce, pt, aad)
    return sealed[:-taglen], sealed[-taglen:]


def ccm_decrypt(key: bytes, nonce: bytes, ct: bytes, aad: bytes, tag: bytes) -> bytes | None:
    try:
        return AESCCM(key, tag_length=len(tag)).decrypt(nonce, ct + tag, aad)
    except InvalidTag:
        return None
