import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from dsse.core.errors import MalformedSignature, SigningFailure, VerificationFailure
from dsse.services.algorithms import EcdsaSigner, EcdsaVerifier, RsaPssSigner
from dsse.services.capabilities import Signer, Verifier

from dsse.tests.fixtures.keys import (
    ed25519_signer,
    p384_signer,
    rsa_signer,
    vector_signer,
)


@pytest.mark.parametrize(
    "make_signer, length",
    [
        (vector_signer, 64),
        (p384_signer, 96),
        (ed25519_signer, 64),
        (lambda: rsa_signer(2048), 256),
    ],
)
def test_signature_lengths(make_signer, length):
    assert len(make_signer().sign(b"message")) == length


@pytest.mark.parametrize(
    "make_signer",
    [vector_signer, p384_signer, ed25519_signer, rsa_signer],
)
def test_adapters_satisfy_capability_protocols(make_signer):
    signer = make_signer()

    assert isinstance(signer, Signer)
    assert isinstance(signer.public_verifier(), Verifier)


@pytest.mark.parametrize(
    "make_signer",
    [vector_signer, p384_signer, ed25519_signer, rsa_signer],
)
def test_truncated_signature_is_malformed(make_signer):
    signer = make_signer()
    verifier = signer.public_verifier()
    raw = signer.sign(b"message")

    with pytest.raises(MalformedSignature):
        verifier.signature_from_bytes(raw[:-1])


def test_zero_ecdsa_component_is_malformed():
    verifier = vector_signer().public_verifier()

    with pytest.raises(MalformedSignature, match="zero"):
        verifier.signature_from_bytes(b"\x00" * 32 + b"\x01" * 32)


@pytest.mark.parametrize(
    "make_signer",
    [vector_signer, ed25519_signer, rsa_signer],
)
def test_verify_rejects_other_message(make_signer):
    signer = make_signer()
    verifier = signer.public_verifier()
    value = verifier.signature_from_bytes(signer.sign(b"message"))

    verifier.verify(b"message", value)
    with pytest.raises(VerificationFailure):
        verifier.verify(b"messagE", value)


def test_ecdsa_hash_algorithm_must_match():
    private_key = ec.generate_private_key(ec.SECP256R1())
    raw = EcdsaSigner(private_key, hashes.SHA384()).sign(b"message")
    verifier = EcdsaVerifier(private_key.public_key())

    with pytest.raises(VerificationFailure):
        verifier.verify(b"message", verifier.signature_from_bytes(raw))


def test_invalid_private_scalar_is_signing_failure():
    with pytest.raises(SigningFailure):
        EcdsaSigner.from_private_scalar(0)


def test_rsa_pss_signs_with_maximum_salt_length():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    raw = RsaPssSigner(private_key).sign(b"m")
    # emLen - hLen - 2 for a 2048-bit modulus and SHA-256
    max_salt = 256 - 32 - 2

    private_key.public_key().verify(
        raw,
        b"m",
        padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=max_salt),
        hashes.SHA256(),
    )
    with pytest.raises(InvalidSignature):
        private_key.public_key().verify(
            raw,
            b"m",
            padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=32),
            hashes.SHA256(),
        )
