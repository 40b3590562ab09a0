from __future__ import annotations

"""HMAC_DRBG (NIST SP 800-90A, section 10.1.2) over `cryptography` HMAC."""

from typing import Sequence

from acvpcodec import DrbgOtherInput

from .primitives import hash_algorithm, hmac_digest


class HmacDrbg:
    def __init__(self, hash_name: str, entropy: bytes, nonce: bytes, perso: bytes) -> None:
        self.hash_name = hash_name
        outlen = hash_algorithm(hash_name).digest_size
        self.K = b"\x00" * outlen
        self.V = b"\x01" * outlen
        self._update(entropy + nonce + perso)

    def _hmac(self, data: bytes) -> bytes:
        return hmac_digest(self.hash_name, self.K, data)

    def _update(self, provided: bytes) -> None:
        self.K = self._hmac(self.V + b"\x00" + provided)
        self.V = self._hmac(self.V)
        if provided:
            self.K = self._hmac(self.V + b"\x01" + provided)
            self.V = self._hmac(self.V)

    def reseed(self, entropy: bytes, additional: bytes = b"") -> None:
        self._update(entropy + additional)

    def generate(self, nbytes: int, additional: bytes = b"") -> bytes:
        if additional:
            self._update(additional)
        out = b""
        while len(out) < nbytes:
            self.V = self._hmac(self.V)
            out += self.V
        self._update(additional)
        return out[:nbytes]


def run_hmac_drbg(
    hash_name: str,
    entropy: bytes,
    nonce: bytes,
    perso: bytes,
    steps: Sequence[DrbgOtherInput],
    nbytes: int,
    prediction_resistance: bool,
) -> bytes:
    """Play the ACVP `otherInput` script and return the last generate output."""
    drbg = HmacDrbg(hash_name, entropy, nonce, perso)
    out = b""
    for step in steps:
        if step.intended_use == "reSeed":
            drbg.reseed(step.entropy_input, step.additional_input)
        elif prediction_resistance:
            drbg.reseed(step.entropy_input, step.additional_input)
            out = drbg.generate(nbytes)
        else:
            out = drbg.generate(nbytes, step.additional_input)
    return out
