"""
Remote source store abstractions.

A 'SourceStore' reads and writes the whole source collection as a single
versioned document. Reads are conditional: the caller passes back the revision
tag it holds and receives 'FetchStatus.UNCHANGED' (and no sources) when the
remote document has not moved since. Revision tags are opaque and are never
compared by the caller, only forwarded.

Read failures raise 'NotFoundError', 'RateLimitedError', 'RemoteError' or
'NetworkError'; a missing, malformed or empty payload is not an error and
yields 'DEFAULT_SOURCES'. Write failures raise 'ConfigError', 'RemoteError' or
'WriteError'. 'test_connection' never raises.

Concrete implementations: 'GistSourceStore', 'InMemorySourceStore'.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source

SOURCES_FILENAME = "sources.json"


class FetchStatus(StrEnum):
    OK = "ok"
    UNCHANGED = "unchanged"


class FetchResult(BaseModel):
    """
    Outcome of a conditional read.

    'sources' is None exactly when 'status' is UNCHANGED; the caller then keeps
    its previous collection. 'revision_tag' is the tag to send on the next read.
    """

    status: FetchStatus
    sources: tuple[Source, ...] | None
    revision_tag: str | None = None


class WriteResult(BaseModel):
    revision_tag: str | None = None


class ConnectionTestResult(BaseModel):
    success: bool
    message: str


def serialize_sources(sources: Sequence[Source]) -> str:
    """Pretty-printed JSON array with a stable key order."""
    return json.dumps([source.to_document() for source in sources], indent=2, ensure_ascii=False)


def parse_sources(payload: str | None) -> tuple[Source, ...]:
    """Decode the 'sources.json' payload, falling back to the defaults when unusable."""
    if payload is None:
        logger.warning(f"File {SOURCES_FILENAME!r} not found in the document, using default sources")
        return DEFAULT_SOURCES
    try:
        raw: Any = json.loads(payload)
    except json.JSONDecodeError as exc:
        logger.warning(f"{SOURCES_FILENAME!r} is not valid JSON ({exc}), using default sources")
        return DEFAULT_SOURCES
    if not isinstance(raw, list):
        logger.warning(f"{SOURCES_FILENAME!r} does not hold an array, using default sources")
        return DEFAULT_SOURCES
    if not raw:
        logger.warning(f"{SOURCES_FILENAME!r} is empty, using default sources")
        return DEFAULT_SOURCES
    try:
        return tuple(Source.model_validate(item) for item in raw)
    except ValidationError as exc:
        logger.warning(f"{SOURCES_FILENAME!r} holds malformed sources ({exc.error_count()} errors), using default sources")
        return DEFAULT_SOURCES


class SourceStore(ABC):
    """Abstract client for the remote document holding the source collection."""

    @abstractmethod
    async def fetch(self, document_id: str | None, revision_tag: str | None = None) -> FetchResult:
        """Read the collection, conditionally on 'revision_tag' when one is given.

        An empty 'document_id' returns 'DEFAULT_SOURCES' with no revision tag.
        """
        pass

    @abstractmethod
    async def write(self, document_id: str | None, credential: str | None, sources: Sequence[Source]) -> WriteResult:
        """Replace the remote collection with 'sources' and return the new revision tag."""
        pass

    @abstractmethod
    async def test_connection(self, document_id: str | None, credential: str | None) -> ConnectionTestResult:
        """Check that the document exists and that 'credential' may write to it."""
        pass
