"""
Base64 codec for the DSSE wire format.

DSSE fixes the alphabet: standard RFC 4648 base64, padded, no line
wraps. Decoding is strict. URL-safe characters, missing padding and
embedded whitespace are rejected rather than silently repaired.
"""

import base64
import binascii


def b64encode(data: bytes) -> str:
    """Standard, padded base64 on a single line."""
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str) -> bytes:
    """
    Strictly decode standard base64.

    Raises:
        ValueError: the input is not canonical standard base64.
    """
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as exc:
        raise ValueError(f"invalid standard base64: {exc}") from exc
