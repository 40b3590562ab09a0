from __future__ import annotations

"""Error hierarchy shared by every acvpcodec layer.

Each error carries a stable negative numeric code next to its message so
callers embedding the codec behind a C-style boundary can forward it as-is.
Nothing in the codec recovers locally: an error aborts the container that
raised it and everything enclosing it.
"""

import errno


class AcvpError(Exception):
    """Base class for every failure raised by acvpcodec."""

    code: int = -errno.EINVAL

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


class MalformedDocument(AcvpError):
    """Input is not valid JSON, or not the JSON container the level expects."""


class FieldError(AcvpError):
    """A required key could not be read from a JSON object."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class MissingRequiredField(FieldError):
    pass


class WrongFieldType(FieldError):
    pass


class InvalidHexString(AcvpError):
    pass


class InvalidEnumValue(AcvpError):
    pass


class UnknownAlgorithm(AcvpError):
    pass


class UnsetResult(AcvpError):
    pass


class InvalidDirectionForFamily(AcvpError):
    pass


class UnsupportedOperation(AcvpError):
    """Raised by crypto engines for algorithms or test types they do not run."""


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
]
