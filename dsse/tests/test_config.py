import pytest
from pydantic import ValidationError

from dsse.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("DSSE_REJECT_DUPLICATE_KEYIDS", raising=False)
    monkeypatch.delenv("DSSE_MAX_PAYLOAD_SIZE_BYTES", raising=False)

    settings = Settings(_env_file=None)

    assert settings.reject_duplicate_keyids is False
    assert settings.max_payload_size_bytes == 0


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("DSSE_REJECT_DUPLICATE_KEYIDS", "true")
    monkeypatch.setenv("DSSE_MAX_PAYLOAD_SIZE_BYTES", "1024")

    settings = get_settings()

    assert settings.reject_duplicate_keyids is True
    assert settings.max_payload_size_bytes == 1024
    assert get_settings() is settings


def test_negative_limit_fails_fast(monkeypatch):
    monkeypatch.setenv("DSSE_MAX_PAYLOAD_SIZE_BYTES", "-1")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_are_frozen():
    settings = Settings(_env_file=None)

    with pytest.raises(ValidationError):
        settings.reject_duplicate_keyids = True
