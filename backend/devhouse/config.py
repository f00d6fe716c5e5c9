"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or malformed."""


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    JWT_SECRET_KEY: str
    JWT_ISSUER: str
    JWT_AUDIENCE: str
    JWT_EXPIRY_MINUTES: int
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'devhouse.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
        self.JWT_ISSUER = os.getenv("JWT_ISSUER", "devhouse-api")
        self.JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "devhouse-clients")
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        raw_expiry = os.getenv("JWT_EXPIRY_MINUTES") or "60"
        try:
            self.JWT_EXPIRY_MINUTES = int(raw_expiry)
        except ValueError:
            raise ConfigurationError(f"JWT_EXPIRY_MINUTES must be an integer, got {raw_expiry!r}")
        self._validate()

    def _validate(self):
        if not self.JWT_SECRET_KEY.strip():
            raise ConfigurationError("JWT_SECRET_KEY is missing; set it in the environment")
        if self.JWT_EXPIRY_MINUTES <= 0:
            raise ConfigurationError("JWT_EXPIRY_MINUTES must be positive")


settings = Settings()
