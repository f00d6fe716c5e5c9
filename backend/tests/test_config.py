import pytest
from devhouse.config import Settings, ConfigurationError


def test_missing_signing_key_fails_at_load(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        Settings()


def test_blank_signing_key_fails_at_load(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "   ")
    with pytest.raises(ConfigurationError):
        Settings()


def test_expiry_defaults_to_sixty_minutes(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "k" * 40)
    monkeypatch.delenv("JWT_EXPIRY_MINUTES", raising=False)
    assert Settings().JWT_EXPIRY_MINUTES == 60


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_bad_expiry_is_a_configuration_error(monkeypatch, value):
    monkeypatch.setenv("JWT_SECRET_KEY", "k" * 40)
    monkeypatch.setenv("JWT_EXPIRY_MINUTES", value)
    with pytest.raises(ConfigurationError):
        Settings()
