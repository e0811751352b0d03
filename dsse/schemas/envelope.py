"""
DSSE envelope: payload, payload type, and the signatures over them.

The envelope owns its signature collection and orchestrates signing and
verification by delegating to ``Signature``. Each signature covers
``PAE(payloadType, payload)``, so a signature can never be replayed
under a different payload type or onto a modified payload.

Wire form (field names and base64 alphabet are fixed for
cross-implementation compatibility)::

    {
        "payloadType": "<str>",
        "payload": "<standard base64>",
        "signatures": [{"keyid": "<str>", "sig": "<standard base64>"}]
    }

Concurrency:
    An Envelope is not internally thread-safe; callers must serialize
    mutating access (``sign``) to a shared Envelope. ``verify`` is
    read-only and safe to call concurrently.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from dsse.core.config import Settings, get_settings
from dsse.core.errors import (
    DuplicateKeyError,
    KeyNotFoundError,
    MalformedEnvelopeError,
    VerificationFailure,
)
from dsse.schemas.signature import Signature
from dsse.services.capabilities import Signer, Verifier
from dsse.utils.encoding import b64decode, b64encode
from dsse.utils.pae import BytesLike

logger = logging.getLogger(__name__)


class Envelope(BaseModel):
    """
    A DSSE envelope.

    ``payload_type`` and ``payload`` are fixed at construction. The
    signature collection only grows, through ``sign``; there is no
    removal. ``signatures`` is an immutable tuple rebound only by
    ``sign``, which keeps key_ids unique.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    payload_type: str = Field(
        ...,
        alias="payloadType",
        frozen=True,
        description="Semantic / media type of the payload, encoded verbatim",
    )

    payload: bytes = Field(
        ...,
        frozen=True,
        description="Protected content, opaque to this package",
    )

    signatures: Tuple[Signature, ...] = Field(
        ...,
        frozen=True,
        description="Signatures in insertion order",
    )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, payload_type: str, payload: BytesLike) -> "Envelope":
        """Create an unsigned envelope."""
        return cls(
            payload_type=payload_type,
            payload=bytes(payload),
            signatures=(),
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def iter_signatures(self) -> Iterator[Signature]:
        return iter(self.signatures)

    def find_signature(self, key_id: str) -> Optional[Signature]:
        """First signature carrying ``key_id``, or None."""
        return next(
            (s for s in self.signatures if s.key_id == key_id),
            None,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def sign(self, key_id: str, signer: Signer) -> Signature:
        """
        Sign this envelope under ``key_id`` and append the signature.

        Either exactly one signature is appended or the envelope is left
        unchanged.

        Raises:
            DuplicateKeyError: a signature with ``key_id`` already exists.
            SigningFailure: propagated unchanged from ``signer``.
        """
        if self.find_signature(key_id) is not None:
            raise DuplicateKeyError(
                f"envelope already has a signature with key_id {key_id!r}",
                key_id=key_id,
            )

        signature = Signature.sign(
            self.payload_type,
            self.payload,
            key_id,
            signer,
        )
        # Field is frozen against callers; sign is the only rebinding path
        object.__setattr__(self, "signatures", self.signatures + (signature,))

        logger.debug(
            "DSSE envelope signed key_id=%r payload_type=%r "
            "payload_size=%d signature_count=%d",
            key_id,
            self.payload_type,
            len(self.payload),
            len(self.signatures),
        )
        return signature

    def verify(self, key_id: str, verifier: Verifier) -> bytes:
        """
        Verify that ``key_id`` signed this exact envelope.

        The caller names the key it expects and supplies a verifier bound
        to that key's public half. Accepting "any of N trusted keys" is a
        caller-side loop over key_ids.

        Returns:
            The payload bytes.

        Raises:
            KeyNotFoundError: no signature carries ``key_id``.
            MalformedSignature: propagated unchanged from ``verifier``.
            VerificationFailure: propagated unchanged from ``verifier``.
        """
        signature = self.find_signature(key_id)
        if signature is None:
            raise KeyNotFoundError(
                f"envelope has no signature with key_id {key_id!r}",
                key_id=key_id,
            )

        try:
            signature.verify(self.payload_type, self.payload, verifier)
        except VerificationFailure:
            logger.warning(
                "DSSE signature rejected for key_id=%r payload_type=%r",
                key_id,
                self.payload_type,
            )
            raise

        return self.payload

    # ------------------------------------------------------------------
    # Wire codec
    # ------------------------------------------------------------------

    @field_validator("payload", mode="before")
    @classmethod
    def decode_payload_base64(cls, v: Any) -> Any:
        # str only ever arrives from the wire form
        if isinstance(v, str):
            return b64decode(v)
        if isinstance(v, (bytearray, memoryview)):
            return bytes(v)
        return v

    @field_serializer("payload", when_used="json")
    def encode_payload_base64(self, v: bytes) -> str:
        return b64encode(v)

    def to_dict(self) -> Dict[str, Any]:
        """Wire record with base64-encoded payload and signatures."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        settings: Optional[Settings] = None,
    ) -> "Envelope":
        """
        Decode a wire record.

        Raises:
            MalformedEnvelopeError: missing or mistyped fields, invalid
                base64, or payload over the configured size limit.
            DuplicateKeyError: duplicate key_ids while
                ``reject_duplicate_keyids`` is enabled.
        """
        try:
            envelope = cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedEnvelopeError(
                f"invalid DSSE envelope: {exc}"
            ) from exc

        envelope._enforce_wire_policy(settings or get_settings())
        return envelope

    @classmethod
    def from_json(
        cls,
        data: Union[str, bytes],
        *,
        settings: Optional[Settings] = None,
    ) -> "Envelope":
        """JSON counterpart of ``from_dict``; same errors."""
        try:
            envelope = cls.model_validate_json(data)
        except ValidationError as exc:
            raise MalformedEnvelopeError(
                f"invalid DSSE envelope JSON: {exc}"
            ) from exc

        envelope._enforce_wire_policy(settings or get_settings())
        return envelope

    def _enforce_wire_policy(self, settings: Settings) -> None:
        limit = settings.max_payload_size_bytes
        if limit and len(self.payload) > limit:
            raise MalformedEnvelopeError(
                f"payload of {len(self.payload)} bytes exceeds limit "
                f"of {limit} bytes"
            )

        counts = Counter(s.key_id for s in self.signatures)
        duplicates = sorted(k for k, n in counts.items() if n > 1)
        if not duplicates:
            return

        if settings.reject_duplicate_keyids:
            raise DuplicateKeyError(
                f"envelope carries duplicate key_ids: {duplicates}",
                key_id=duplicates[0],
            )

        # Accepted; verify() will use the first entry per key_id
        logger.warning(
            "DSSE envelope carries duplicate key_ids %s; "
            "verification uses the first match",
            duplicates,
        )
