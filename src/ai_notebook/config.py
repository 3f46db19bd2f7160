"""
Runtime settings.

'Settings' reads 'AI_NOTEBOOK_*' environment variables (and a local '.env').
Secrets are looked up first as a file under '/secrets/<NAME>' and then in the
environment, so the same code runs with mounted secret files or plain
variables; 'Settings.from_env' applies that lookup on top of the environment.
"""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ai_notebook.storage.gist import GITHUB_API_BASE_URL

PUBLIC_GIST_ID = "66334a5aafde2cd3ed37c02a8379189b"
SECRETS_DIR = Path("/secrets")

# Field name to secret name.
SECRET_FIELDS = {
    "admin_password": "AI_NOTEBOOK_ADMIN_PASSWORD",
    "openai_api_key": "OPENAI_API_KEY",
}


def get_secret(name: str, secrets_dir: Path = SECRETS_DIR) -> str | None:
    """Return the secret 'name' from '<secrets_dir>/<name>' or the environment, or None."""
    secret_file = secrets_dir / name
    if secret_file.exists():
        return secret_file.read_text().strip() or None
    return os.environ.get(name) or None


class Settings(BaseSettings):
    """Application settings loaded from 'AI_NOTEBOOK_*' environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AI_NOTEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Remote document
    gist_id: str = PUBLIC_GIST_ID
    github_api_base_url: str = GITHUB_API_BASE_URL
    poll_interval_seconds: float = 20.0

    # Admin
    credential_max_age_days: int = 60
    storage_path: Path = Path("~/.ai_notebook/state.json")
    admin_username: str | None = None
    admin_password: str | None = None

    # Answering
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    llm_model: str = "gpt-4o-mini"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, secrets_dir: Path = SECRETS_DIR) -> "Settings":
        secrets = {field: get_secret(name, secrets_dir) for field, name in SECRET_FIELDS.items()}
        return cls(**{field: value for field, value in secrets.items() if value is not None})
