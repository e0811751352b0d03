"""
Concrete signing capabilities backed by ``cryptography``.

Provides Signer / Verifier pairs for the algorithms DSSE envelopes are
commonly signed with:

- ECDSA over NIST curves, raw fixed-width ``r || s`` encoding
- Ed25519
- RSASSA-PSS with MGF1

Key generation, key storage and trust decisions are out of scope. Each
object wraps a key the caller already holds.

Library exceptions are translated into the DSSE error taxonomy so the
envelope layer can propagate them unchanged.
"""

from __future__ import annotations

from typing import Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from dsse.core.errors import (
    MalformedSignature,
    SigningFailure,
    VerificationFailure,
)


# ----------------------------------------------------------------------
# ECDSA (raw r || s)
# ----------------------------------------------------------------------


def _curve_byte_length(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


class EcdsaSigner:
    """
    ECDSA signer producing fixed-width ``r || s`` signatures.

    The raw encoding (not DER) is what the published DSSE test vectors
    use: 64 bytes for P-256, 96 for P-384, 132 for P-521.
    """

    def __init__(
        self,
        private_key: ec.EllipticCurvePrivateKey,
        hash_algorithm: Optional[hashes.HashAlgorithm] = None,
    ) -> None:
        self._private_key = private_key
        self._hash_algorithm = hash_algorithm or hashes.SHA256()

    @classmethod
    def from_private_scalar(
        cls,
        scalar: int,
        curve: Optional[ec.EllipticCurve] = None,
        hash_algorithm: Optional[hashes.HashAlgorithm] = None,
    ) -> "EcdsaSigner":
        """Build a signer from a known private scalar (e.g. a test vector)."""
        try:
            private_key = ec.derive_private_key(scalar, curve or ec.SECP256R1())
        except (ValueError, TypeError) as exc:
            raise SigningFailure(f"Invalid ECDSA private scalar: {exc}") from exc
        return cls(private_key, hash_algorithm)

    def public_verifier(self) -> "EcdsaVerifier":
        """Verifier for the public half of this key, same hash."""
        return EcdsaVerifier(self._private_key.public_key(), self._hash_algorithm)

    def sign(self, message: bytes) -> bytes:
        try:
            der = self._private_key.sign(message, ec.ECDSA(self._hash_algorithm))
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningFailure(f"ECDSA signing failed: {exc}") from exc

        r, s = decode_dss_signature(der)
        width = _curve_byte_length(self._private_key.curve)
        return r.to_bytes(width, "big") + s.to_bytes(width, "big")


class EcdsaVerifier:
    """ECDSA verifier accepting fixed-width ``r || s`` signatures."""

    def __init__(
        self,
        public_key: ec.EllipticCurvePublicKey,
        hash_algorithm: Optional[hashes.HashAlgorithm] = None,
    ) -> None:
        self._public_key = public_key
        self._hash_algorithm = hash_algorithm or hashes.SHA256()

    def signature_from_bytes(self, data: bytes) -> bytes:
        """Convert raw ``r || s`` into the DER form ``cryptography`` expects."""
        width = _curve_byte_length(self._public_key.curve)
        if len(data) != 2 * width:
            raise MalformedSignature(
                f"ECDSA {self._public_key.curve.name} signature must be "
                f"{2 * width} bytes, got {len(data)}"
            )

        r = int.from_bytes(data[:width], "big")
        s = int.from_bytes(data[width:], "big")
        if r == 0 or s == 0:
            raise MalformedSignature("ECDSA signature component is zero")

        return encode_dss_signature(r, s)

    def verify(self, message: bytes, signature: bytes) -> None:
        try:
            self._public_key.verify(
                signature, message, ec.ECDSA(self._hash_algorithm)
            )
        except InvalidSignature as exc:
            raise VerificationFailure("ECDSA signature rejected") from exc


# ----------------------------------------------------------------------
# Ed25519
# ----------------------------------------------------------------------

_ED25519_SIGNATURE_LENGTH = 64


class Ed25519Signer:
    def __init__(self, private_key: ed25519.Ed25519PrivateKey) -> None:
        self._private_key = private_key

    def public_verifier(self) -> "Ed25519Verifier":
        return Ed25519Verifier(self._private_key.public_key())

    def sign(self, message: bytes) -> bytes:
        try:
            return self._private_key.sign(message)
        except (ValueError, TypeError) as exc:
            raise SigningFailure(f"Ed25519 signing failed: {exc}") from exc


class Ed25519Verifier:
    def __init__(self, public_key: ed25519.Ed25519PublicKey) -> None:
        self._public_key = public_key

    def signature_from_bytes(self, data: bytes) -> bytes:
        if len(data) != _ED25519_SIGNATURE_LENGTH:
            raise MalformedSignature(
                f"Ed25519 signature must be {_ED25519_SIGNATURE_LENGTH} "
                f"bytes, got {len(data)}"
            )
        return bytes(data)

    def verify(self, message: bytes, signature: bytes) -> None:
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature as exc:
            raise VerificationFailure("Ed25519 signature rejected") from exc


# ----------------------------------------------------------------------
# RSASSA-PSS
# ----------------------------------------------------------------------


class RsaPssSigner:
    """
    RSASSA-PSS signer (MGF1 with the same hash, maximum salt length).

    Verifiers recover the salt length automatically.
    """

    def __init__(
        self,
        private_key: rsa.RSAPrivateKey,
        hash_algorithm: Optional[hashes.HashAlgorithm] = None,
    ) -> None:
        self._private_key = private_key
        self._hash_algorithm = hash_algorithm or hashes.SHA256()

    def public_verifier(self) -> "RsaPssVerifier":
        return RsaPssVerifier(self._private_key.public_key(), self._hash_algorithm)

    def sign(self, message: bytes) -> bytes:
        try:
            return self._private_key.sign(
                message,
                padding.PSS(
                    mgf=padding.MGF1(self._hash_algorithm),
                    salt_length=padding.PSS.MAX_LENGTH,
                ),
                self._hash_algorithm,
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningFailure(f"RSA-PSS signing failed: {exc}") from exc


class RsaPssVerifier:
    def __init__(
        self,
        public_key: rsa.RSAPublicKey,
        hash_algorithm: Optional[hashes.HashAlgorithm] = None,
    ) -> None:
        self._public_key = public_key
        self._hash_algorithm = hash_algorithm or hashes.SHA256()

    def signature_from_bytes(self, data: bytes) -> bytes:
        # PSS signatures are always exactly the modulus length
        expected = (self._public_key.key_size + 7) // 8
        if len(data) != expected:
            raise MalformedSignature(
                f"RSA-{self._public_key.key_size} signature must be "
                f"{expected} bytes, got {len(data)}"
            )
        return bytes(data)

    def verify(self, message: bytes, signature: bytes) -> None:
        try:
            self._public_key.verify(
                signature,
                message,
                padding.PSS(
                    mgf=padding.MGF1(self._hash_algorithm),
                    salt_length=padding.PSS.AUTO,
                ),
                self._hash_algorithm,
            )
        except InvalidSignature as exc:
            raise VerificationFailure("RSA-PSS signature rejected") from exc
