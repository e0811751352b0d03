"""
Centralized configuration for DSSE envelope handling.

Pydantic v2 settings management. Configuration only governs how wire
records are accepted on deserialization; signing and verification
semantics are fixed and never configurable.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings parsed from the environment (``DSSE_`` prefix).

    Fails fast on malformed values.
    """

    # ---------------------------------------------------------------------
    # Deserialization policy
    # ---------------------------------------------------------------------

    reject_duplicate_keyids: Annotated[
        bool,
        Field(
            default=False,
            description=(
                "Reject wire envelopes carrying more than one signature "
                "under the same keyid. Off by default: duplicates are "
                "accepted and verify() uses the first match."
            ),
        ),
    ]

    # ---------------------------------------------------------------------
    # Operational boundaries
    # ---------------------------------------------------------------------

    max_payload_size_bytes: Annotated[
        int,
        Field(
            default=0,
            ge=0,
            description=(
                "Upper bound on decoded payload size for wire envelopes. "
                "0 disables the check."
            ),
        ),
    ]

    model_config = SettingsConfigDict(
        env_prefix="DSSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings provider.

    Parsed once; call ``get_settings.cache_clear()`` to reload.
    """
    return Settings()
