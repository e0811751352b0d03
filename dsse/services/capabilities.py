"""
Abstract signing and verification capabilities.

The envelope layer is generic over the signature algorithm. Callers
supply objects satisfying these protocols; the concrete key material
and algorithm stay entirely on the caller's side.

Implementations are expected to:
- raise ``SigningFailure`` when the algorithm rejects a message or key
- raise ``MalformedSignature`` when signature bytes have the wrong shape
- raise ``VerificationFailure`` when a signature does not authenticate
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Signer(Protocol):
    """A private key bound to one algorithm."""

    def sign(self, message: bytes) -> bytes:
        """Return raw signature bytes over ``message``."""
        ...


@runtime_checkable
class Verifier(Protocol):
    """A public key bound to one algorithm."""

    def signature_from_bytes(self, data: bytes) -> Any:
        """
        Reconstruct a typed signature value from raw bytes.

        Raises:
            MalformedSignature: length or structure is invalid for
                this algorithm.
        """
        ...

    def verify(self, message: bytes, signature: Any) -> None:
        """
        Accept or reject ``signature`` for ``message``.

        Raises:
            VerificationFailure: the signature does not authenticate
                the message under this key.
        """
        ...
