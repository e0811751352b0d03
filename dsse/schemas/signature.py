"""
A single DSSE signature entry.

A Signature pairs a caller-chosen ``key_id`` with the raw bytes an
algorithm produced over the envelope's PAE. The ``key_id`` is an
unauthenticated hint: it is not covered by the signature and only
selects which entry to check during verification.

Wire form::

    {"keyid": "<str>", "sig": "<standard base64>"}
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from dsse.services.capabilities import Signer, Verifier
from dsse.utils.encoding import b64decode, b64encode
from dsse.utils.pae import pae_for

logger = logging.getLogger(__name__)


class Signature(BaseModel):
    """
    Immutable (key_id, signature_bytes) pair.

    Created once by ``Signature.sign``; never modified afterwards.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    key_id: str = Field(
        ...,
        alias="keyid",
        description="Unauthenticated hint naming the signing key",
    )

    signature_bytes: bytes = Field(
        ...,
        alias="sig",
        description="Raw signature output, opaque to this package",
    )

    # ------------------------------------------------------------------
    # Wire codec
    # ------------------------------------------------------------------

    @field_validator("signature_bytes", mode="before")
    @classmethod
    def decode_signature_base64(cls, v: Any) -> Any:
        # str only ever arrives from the wire form
        if isinstance(v, str):
            return b64decode(v)
        if isinstance(v, (bytearray, memoryview)):
            return bytes(v)
        return v

    @field_serializer("signature_bytes", when_used="json")
    def encode_signature_base64(self, v: bytes) -> str:
        return b64encode(v)

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Signature":
        return cls.model_validate(data)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @classmethod
    def sign(
        cls,
        payload_type: str,
        payload: bytes,
        key_id: str,
        signer: Signer,
    ) -> "Signature":
        """
        Sign ``PAE(payload_type, payload)`` and wrap the result.

        Exceptions raised by ``signer`` (normally ``SigningFailure``)
        propagate unchanged. Attaching the result to an envelope is the
        caller's decision.
        """
        message = pae_for(payload_type, payload)
        raw = signer.sign(message)
        return cls(key_id=key_id, signature_bytes=bytes(raw))

    def verify(
        self,
        payload_type: str,
        payload: bytes,
        verifier: Verifier,
    ) -> None:
        """
        Check this signature over ``PAE(payload_type, payload)``.

        The verifier must already be bound to the public key the caller
        expects for ``key_id``; nothing here checks that binding.

        Raises:
            MalformedSignature: stored bytes do not fit the algorithm.
            VerificationFailure: the algorithm rejected the signature.
        """
        message = pae_for(payload_type, payload)
        value = verifier.signature_from_bytes(self.signature_bytes)
        verifier.verify(message, value)

        logger.debug(
            "DSSE signature verified key_id=%r payload_type=%r",
            self.key_id,
            payload_type,
        )
