from __future__ import annotations

import logging
from typing import Any

from acvpcodec import (
    AcvpTestCase,
    BlockCipher,
    CipherKind,
    Direction,
    Drbg,
    GroupContext,
    Mode,
    MsgAuth,
    MsgAuthOutput,
    SecureHash,
    TestType,
    UnsupportedOperation,
    engines,
)

from . import primitives
from .hmac_drbg import run_hmac_drbg
from .mct import aes_ecb_mct, sha2_mct, sha3_mct

log = logging.getLogger(__name__)

_AES_AFT_MODES = (Mode.ECB, Mode.CBC, Mode.CTR, Mode.OFB, Mode.CFB128)


@engines.register("cryptography")
class CryptographyEngine:
    """Reference engine backed by the `cryptography` package.

    Covers SHA-1/2/3 (AFT and MCT), AES ECB/CBC/CTR/OFB/CFB128 AFT, AES-ECB
    MCT, HMAC, CMAC-AES, AES-GCM/GMAC/CCM and HMAC_DRBG. Anything else raises
    :class:`UnsupportedOperation`.
    """

    name = "cryptography"

    def supports(self, algorithm: str) -> bool:
        if algorithm in primitives.HASH_NAMES:
            return True
        if algorithm.startswith("HMAC-"):
            return primitives.hmac_hash_name(algorithm) in primitives.HASH_NAMES
        return algorithm in {
            "CMAC-AES",
            "ACVP-AES-GCM",
            "ACVP-AES-GMAC",
            "ACVP-AES-CCM",
            "ACVP-AES-ECB",
            "ACVP-AES-CBC",
            "ACVP-AES-CTR",
            "ACVP-AES-OFB",
            "ACVP-AES-CFB128",
            "hmacDRBG",
        }

    def compute(self, case: AcvpTestCase, ctx: GroupContext) -> Any:
        if not self.supports(ctx.algorithm):
            raise UnsupportedOperation(f"Algorithm '{ctx.algorithm}' is not supported by the cryptography engine")
        try:
            if isinstance(case, SecureHash):
                return self._hash(case, ctx)
            if isinstance(case, BlockCipher):
                return self._block_cipher(case, ctx)
            if isinstance(case, MsgAuth):
                return self._msg_auth(case, ctx)
            if isinstance(case, Drbg):
                return self._drbg(case, ctx)
        except ValueError as exc:
            # cryptography rejects key/IV/tag sizes it cannot handle with ValueError
            raise UnsupportedOperation(f"tcId {case.tcid}: {exc}") from exc
        raise UnsupportedOperation(f"No handler for {type(case).__name__}")

    def _hash(self, case: SecureHash, ctx: GroupContext) -> Any:
        if ctx.test_type is TestType.MCT:
            if ctx.algorithm.startswith("SHA3-"):
                return sha3_mct(ctx.algorithm, case.msg)
            return sha2_mct(ctx.algorithm, case.msg)
        return primitives.digest(ctx.algorithm, case.msg)

    def _block_cipher(self, case: BlockCipher, ctx: GroupContext) -> Any:
        mode = ctx.variant.mode
        encrypt = ctx.direction is Direction.ENCRYPT
        if ctx.test_type is TestType.MCT:
            if mode is not Mode.ECB:
                raise UnsupportedOperation(f"MCT for '{ctx.algorithm}' is not supported by the cryptography engine")
            return aes_ecb_mct(case.key, case.input, encrypt)
        if ctx.test_type is not TestType.AFT or mode not in _AES_AFT_MODES:
            raise UnsupportedOperation(
                f"{ctx.test_type.value} for '{ctx.algorithm}' is not supported by the cryptography engine"
            )
        return primitives.aes_crypt(mode, case.key, case.iv, case.input, encrypt)

    def _msg_auth(self, case: MsgAuth, ctx: GroupContext) -> Any:
        variant = ctx.variant
        verify = ctx.direction in (Direction.VERIFY, Direction.DECRYPT)

        if variant.mode in (Mode.HMAC, Mode.CMAC):
            if variant.mode is Mode.HMAC:
                mac = primitives.hmac_digest(primitives.hmac_hash_name(ctx.algorithm), case.key, case.msg)
            elif variant.cipher is CipherKind.AES:
                mac = primitives.cmac_aes(case.key, case.msg)
            else:
                raise UnsupportedOperation(f"'{ctx.algorithm}' is not supported by the cryptography engine")
            mac = mac[: ctx.taglen or len(mac)]
            if verify:
                return primitives.bytes_eq(mac, case.tag)
            return mac

        if variant.mode is Mode.GMAC:
            _, tag = primitives.gcm_encrypt(case.key, case.iv, b"", case.aad, ctx.taglen)
            if verify:
                return primitives.bytes_eq(tag, case.tag)
            return tag

        if variant.mode is Mode.GCM:
            if ctx.direction is Direction.DECRYPT:
                pt = primitives.gcm_decrypt(case.key, case.iv, case.msg, case.aad, case.tag)
                return False if pt is None else pt
            ct, tag = primitives.gcm_encrypt(case.key, case.iv, case.msg, case.aad, ctx.taglen)
            return MsgAuthOutput(ct, tag)

        if variant.mode is Mode.CCM:
            if ctx.direction is Direction.DECRYPT:
                pt = primitives.ccm_decrypt(case.key, case.iv, case.msg, case.aad, case.tag)
                return False if pt is None else pt
            ct, tag = primitives.ccm_encrypt(case.key, case.iv, case.msg, case.aad, ctx.taglen)
            return MsgAuthOutput(ct, tag)

        raise UnsupportedOperation(f"'{ctx.algorithm}' is not supported by the cryptography engine")

    def _drbg(self, case: Drbg, ctx: GroupContext) -> Any:
        if ctx.algorithm != "hmacDRBG":
            raise UnsupportedOperation(f"'{ctx.algorithm}' is not supported by the cryptography engine")
        log.debug("tcId %d: HMAC_DRBG with %d steps", case.tcid, len(case.other_input))
        return run_hmac_drbg(
            primitives.drbg_hash_name(ctx.drbgmode),
            case.entropy_input,
            case.nonce,
            case.perso_string,
            case.other_input,
            ctx.returned_bits_len,
            ctx.prediction_resistance,
        )


__all__ = ["CryptographyEngine"]
