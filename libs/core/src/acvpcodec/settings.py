from __future__ import annotations

"""Environment-driven knobs.

Values are read on every call so tests and long-lived callers can change the
environment without reloading the module.
"""

import os

DEFAULT_PRETTY_INDENT = 3
DEFAULT_ENGINE = "cryptography"


def pretty_indent() -> int:
    override = os.getenv("ACVPCODEC_PRETTY_INDENT")
    if override:
        try:
            indent = int(override)
        except ValueError as exc:
            raise ValueError("ACVPCODEC_PRETTY_INDENT must be an integer") from exc
        if indent < 0:
            raise ValueError("ACVPCODEC_PRETTY_INDENT must be non-negative")
        return indent
    return DEFAULT_PRETTY_INDENT


def default_engine() -> str:
    return os.getenv("ACVPCODEC_ENGINE") or DEFAULT_ENGINE


__all__ = ["DEFAULT_PRETTY_INDENT", "DEFAULT_ENGINE", "pretty_indent", "default_engine"]
