"""Random code generation for share codes and invites."""

from __future__ import annotations

import secrets

DEFAULT_CODE_BYTES = 8


def generate_code(num_bytes: int = DEFAULT_CODE_BYTES) -> str:
    """
    Return ``num_bytes`` of CSPRNG output as lowercase hex.

    With the default of 8 bytes the result is 16 characters long.
    """
    if num_bytes < 1:
        raise ValueError("num_bytes must be positive")
    return secrets.token_hex(num_bytes)
