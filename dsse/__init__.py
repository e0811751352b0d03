"""
Dead Simple Signing Envelope (DSSE).

Binds an arbitrary payload to its type before signing, so signatures
cannot be replayed across payload types or onto modified payloads.
The signature algorithm is supplied by the caller through the
``Signer`` / ``Verifier`` capabilities.
"""

from dsse.core.errors import (
    DSSEError,
    DuplicateKeyError,
    KeyNotFoundError,
    MalformedEnvelopeError,
    MalformedSignature,
    SigningFailure,
    VerificationFailure,
)
from dsse.schemas.envelope import Envelope
from dsse.schemas.signature import Signature
from dsse.services.capabilities import Signer, Verifier
from dsse.utils.pae import pae_encode, pae_for

__all__ = [
    "DSSEError",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "MalformedEnvelopeError",
    "MalformedSignature",
    "SigningFailure",
    "VerificationFailure",
    "Envelope",
    "Signature",
    "Signer",
    "Verifier",
    "pae_encode",
    "pae_for",
]
