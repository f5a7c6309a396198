"""Application settings and validation."""

import os
from pathlib import Path

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'app.db'}"


class Settings:
    ENV: str
    DATABASE_URL: str
    DB_ECHO: bool
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    DEFAULT_PAGE_SIZE: int

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", _DEFAULT_DB_URL)
        self.DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and not os.getenv("DATABASE_URL"):
            raise RuntimeError("DATABASE_URL must be set explicitly in non-dev environments")
        if self.DEFAULT_PAGE_SIZE < 1:
            raise RuntimeError("DEFAULT_PAGE_SIZE must be a positive integer")


settings = Settings()
