"""Reference crypto engine backed by the `cryptography` package.

Importing the package registers :class:`CryptographyEngine` under the name
``"cryptography"`` in :data:`acvpcodec.engines`.
"""

from .engine import CryptographyEngine

__all__ = ["CryptographyEngine"]
