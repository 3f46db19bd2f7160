"""
Session state.

One 'SessionState' per session holds everything the manager reconciles: the
published collection (last fetched from or written to the remote store), the
admin's draft, the revision tag of the published collection and the role.
Collections are tuples of frozen 'Source' models, so replacing a collection is
the only way to change it.

The session is LOADING until the first fetch settles, then READY. A READY
session is dirty when the draft differs structurally from the published
collection; only an admin can make it dirty.
"""

from enum import StrEnum

from pydantic import BaseModel

from ai_notebook.sources.data_models import Source, sources_equal


class SessionRole(StrEnum):
    GUEST = "guest"
    ADMIN = "admin"


class SessionPhase(StrEnum):
    LOADING = "loading"
    READY = "ready"


class SessionState(BaseModel):
    phase: SessionPhase = SessionPhase.LOADING
    role: SessionRole = SessionRole.GUEST
    published: tuple[Source, ...] = ()
    draft: tuple[Source, ...] = ()
    revision_tag: str | None = None
    load_error: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is SessionRole.ADMIN

    @property
    def is_dirty(self) -> bool:
        return not sources_equal(self.published, self.draft)
