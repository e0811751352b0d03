"""
Pre-Authentication Encoding (PAE) for DSSE.

PAE is the byte string that is actually signed:

    "DSSEv1" SP LEN(type) SP type SP LEN(body) SP body

SP is a single ASCII space and LEN is the decimal byte length with no
leading zeros. Length prefixes make the encoding unambiguous for any
input, including bodies containing spaces or newlines.

IMPORTANT DESIGN RULE:
- This module encodes bytes, and bytes only.
- Output MUST be byte-for-byte identical to every other DSSE
  implementation, or signatures will not cross-verify.
"""

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

PAE_PREFIX = b"DSSEv1"


def pae_encode(type_bytes: BytesLike, body_bytes: BytesLike) -> bytes:
    """
    Encode a (type, body) pair into its pre-authentication form.

    Args:
        type_bytes: Payload type, already encoded to bytes.
        body_bytes: Raw payload bytes.

    Returns:
        The PAE byte string.

    Example:
        >>> pae_encode(b"http://example.com/HelloWorld", b"hello world")
        b'DSSEv1 29 http://example.com/HelloWorld 11 hello world'
    """
    type_bytes = bytes(type_bytes)
    body_bytes = bytes(body_bytes)

    return b" ".join(
        (
            PAE_PREFIX,
            str(len(type_bytes)).encode("ascii"),
            type_bytes,
            str(len(body_bytes)).encode("ascii"),
            body_bytes,
        )
    )


def pae_for(payload_type: str, payload: BytesLike) -> bytes:
    """PAE of a textual payload type (UTF-8) and a raw payload."""
    return pae_encode(payload_type.encode("utf-8"), payload)
