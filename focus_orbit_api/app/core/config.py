"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; in a deployment you should at
least override ``SECRET_KEY`` and ``DATABASE_URL``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Focus Orbit API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path for the SQLite database.  A relative path is resolved
    # relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "focus_orbit.db")

    # Comma‑separated identities that are granted the ``admin`` role when
    # the database is initialised.  Without at least one entry nobody can
    # assign roles.
    admin_identities: str = os.getenv("ADMIN_IDENTITIES", "")

    # Streak bookkeeping constants.
    welcome_freezes: int = int(os.getenv("WELCOME_FREEZES", "2"))
    freeze_milestone_days: int = int(os.getenv("FREEZE_MILESTONE_DAYS", "21"))
    max_freeze_balance: int = int(os.getenv("MAX_FREEZE_BALANCE", "10"))

    def admin_identity_list(self) -> list[str]:
        return [i.strip() for i in self.admin_identities.split(",") if i.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
