from __future__ import annotations

"""Monte Carlo loops for the ACVP hash and AES-ECB test types.

The loops follow the ACVP SHA/SHA-3/AES validation-system descriptions: 100
recorded checkpoints of 1000 chained iterations each.
"""

from typing import List

from acvpcodec import BlkCipherMCTOutput, Mode

from .primitives import aes_context, digest

CHECKPOINTS = 100
ITERATIONS = 1000


def sha2_mct(name: str, seed: bytes) -> List[bytes]:
    """SHA-1/SHA-2 chain: each digest covers the previous three."""
    results: List[bytes] = []
    for _ in range(CHECKPOINTS):
        md0 = md1 = md2 = seed
        for _ in range(ITERATIONS):
            md0, md1, md2 = md1, md2, digest(name, md0 + md1 + md2)
        seed = md2
        results.append(md2)
    return results


def sha3_mct(name: str, seed: bytes) -> List[bytes]:
    results: List[bytes] = []
    md = seed
    for _ in range(CHECKPOINTS):
        for _ in range(ITERATIONS):
            md = digest(name, md)
        results.append(md)
    return results


def _next_aes_key(key: bytes, prev: bytes, last: bytes) -> bytes:
    if len(key) == 16:
        mix = last
    elif len(key) == 24:
        mix = prev[-8:] + last
    else:
        mix = prev + last
    return bytes(k ^ m for k, m in zip(key, mix))


def aes_ecb_mct(key: bytes, data: bytes, encrypt: bool) -> List[BlkCipherMCTOutput]:
    results: List[BlkCipherMCTOutput] = []
    for _ in range(CHECKPOINTS):
        ctx = aes_context(Mode.ECB, key, b"", encrypt)
        inp = data
        prev = last = data
        for _ in range(ITERATIONS):
            prev, last = last, ctx.update(last)
        ctx.finalize()
        results.append(BlkCipherMCTOutput.new_aes(key=key, iv=b"", inp=inp, out=last))
        key = _next_aes_key(key, prev, last)
        data = last
    return results
