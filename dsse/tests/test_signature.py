import pytest
from pydantic import ValidationError

from dsse.core.errors import MalformedSignature, SigningFailure, VerificationFailure
from dsse.schemas.signature import Signature
from dsse.utils.pae import pae_for

from dsse.tests.fixtures.keys import (
    FailingSigner,
    RecordingSigner,
    RecordingVerifier,
    ed25519_signer,
)


def test_sign_passes_pae_to_signer():
    signer = RecordingSigner(signature=b"sig")

    signature = Signature.sign("application/x", b"body", "k1", signer)

    assert signer.messages == [b"DSSEv1 13 application/x 4 body"]
    assert signature.key_id == "k1"
    assert signature.signature_bytes == b"sig"


def test_sign_propagates_signing_failure_verbatim():
    failure = SigningFailure("key rejected")

    with pytest.raises(SigningFailure) as excinfo:
        Signature.sign("t", b"p", "k1", FailingSigner(failure))

    assert excinfo.value is failure


def test_sign_does_not_wrap_foreign_capability_errors():
    with pytest.raises(RuntimeError, match="hsm offline"):
        Signature.sign("t", b"p", "k1", FailingSigner(RuntimeError("hsm offline")))


def test_verify_hands_pae_and_parsed_value_to_verifier():
    verifier = RecordingVerifier(expected=b"sig")
    signature = Signature(key_id="k1", signature_bytes=b"sig")

    assert signature.verify("t", b"p", verifier) is None
    assert verifier.calls == [(pae_for("t", b"p"), b"sig")]


def test_verify_rejects_wrong_payload():
    signer = ed25519_signer()
    signature = Signature.sign("t", b"payload", "k1", signer)

    with pytest.raises(VerificationFailure):
        signature.verify("t", b"payloaD", signer.public_verifier())


def test_verify_reports_malformed_bytes_before_verifying():
    signer = ed25519_signer()
    signature = Signature(key_id="k1", signature_bytes=b"\x00" * 10)

    with pytest.raises(MalformedSignature):
        signature.verify("t", b"payload", signer.public_verifier())


def test_signature_is_immutable():
    signature = Signature(key_id="k1", signature_bytes=b"sig")

    with pytest.raises(ValidationError):
        signature.key_id = "k2"

    assert signature.key_id == "k1"


def test_wire_form_uses_keyid_and_sig():
    signature = Signature(key_id="k1", signature_bytes=b"\xfb\xff")

    assert signature.to_dict() == {"keyid": "k1", "sig": "+/8="}
    assert Signature.from_dict({"keyid": "k1", "sig": "+/8="}) == signature
