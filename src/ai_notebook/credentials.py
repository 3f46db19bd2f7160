"""
Admin write credential.

The credential is the GitHub token that gates writes to the Gist, stored with
the time it was saved. Tokens are typically issued with an expiry, so a token
saved long ago is flagged as possibly stale; the check is advisory only and
never blocks a save.
"""

from datetime import datetime, timedelta

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ai_notebook.persistence.base import KeyValueStore
from ai_notebook.utils.time import utcnow

CREDENTIAL_KEY = "ai-notebook-admin-config"
DEFAULT_MAX_AGE_DAYS = 60


class Credential(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    write_token: str = Field(alias="githubToken")
    saved_at: datetime | None = Field(default=None, alias="savedAt")


def is_stale(credential: Credential | None, max_age_days: int = DEFAULT_MAX_AGE_DAYS, now: datetime | None = None) -> bool:
    """True when the credential was saved more than 'max_age_days' ago."""
    if credential is None or credential.saved_at is None:
        return False
    now = now or utcnow()
    saved_at = credential.saved_at
    if saved_at.tzinfo is None:
        saved_at = saved_at.replace(tzinfo=now.tzinfo)
    return saved_at < now - timedelta(days=max_age_days)


class CredentialStore:
    """
    Persisted holder of the admin credential.

    Attributes:
        storage: Key-value backing; the record lives under 'CREDENTIAL_KEY'.
        max_age_days: Age after which 'is_stale' reports the credential.
    """

    def __init__(self, storage: KeyValueStore, max_age_days: int = DEFAULT_MAX_AGE_DAYS) -> None:
        self.storage = storage
        self.max_age_days = max_age_days

    def load(self) -> Credential | None:
        raw = self.storage.get(CREDENTIAL_KEY)
        if raw is None or raw == "null":
            return None
        try:
            return Credential.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring unreadable stored credential: {exc.error_count()} validation errors")
            return None

    def save(self, write_token: str) -> Credential:
        """Overwrite the stored credential, stamping it with the current time."""
        credential = Credential(write_token=write_token, saved_at=utcnow())
        self.storage.set(CREDENTIAL_KEY, credential.model_dump_json(by_alias=True))
        logger.info("Admin write credential saved")
        return credential

    @property
    def write_token(self) -> str | None:
        credential = self.load()
        if credential is None or not credential.write_token:
            return None
        return credential.write_token

    def is_stale(self, now: datetime | None = None) -> bool:
        return is_stale(self.load(), self.max_age_days, now)
