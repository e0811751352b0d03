"""
Exception taxonomy for DSSE envelope operations.

Every failure surfaced by this package derives from ``DSSEError``.
Errors are raised to the caller as-is; nothing here retries or
downgrades a failure to a warning.
"""

from __future__ import annotations

from typing import Optional


class DSSEError(Exception):
    """Base class for all DSSE failures."""

    def __init__(self, message: str = "", *, key_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.key_id = key_id


# ----------------------------------------------------------------------
# Envelope-level precondition failures
# ----------------------------------------------------------------------


class DuplicateKeyError(DSSEError):
    """Raised when a signature with the same key_id already exists."""


class KeyNotFoundError(DSSEError):
    """Raised when no signature exists for the requested key_id."""


class MalformedEnvelopeError(DSSEError):
    """Raised when a wire record cannot be decoded into an Envelope."""


# ----------------------------------------------------------------------
# Capability failures
#
# Raised by signer / verifier capabilities and passed through the
# envelope layer unchanged.
# ----------------------------------------------------------------------


class SigningFailure(DSSEError):
    """Raised when the signing algorithm rejects the message or key."""


class VerificationFailure(DSSEError):
    """Raised when a signature does not authenticate the message."""


class MalformedSignature(DSSEError):
    """
    Raised when stored signature bytes cannot be parsed into the
    structure the verification algorithm expects.

    Indicates corrupted data or a signature produced by a different
    algorithm.
    """
