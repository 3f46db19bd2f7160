"""
In-process 'SourceStore'.

Keeps each document as the serialised 'sources.json' text plus an integer
revision, so conditional reads, default fallbacks and round trips behave like
the Gist backend. Useful for local development without network access and as
the store behind the session tests.
"""

from collections.abc import Sequence

from ai_notebook import texts
from ai_notebook.errors import ConfigError, NotFoundError, RemoteError
from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source
from ai_notebook.storage.base import (
    ConnectionTestResult,
    FetchResult,
    FetchStatus,
    SourceStore,
    WriteResult,
    parse_sources,
    serialize_sources,
)


class InMemorySourceStore(SourceStore):
    """
    Attributes:
        documents: Document id to '(payload, revision)'. A None payload models a
            document without a 'sources.json' file.
        tokens: Credential to the set of scopes it grants. Writes require the
            'gist' scope.
    """

    def __init__(self, tokens: dict[str, set[str]] | None = None) -> None:
        self.documents: dict[str, tuple[str | None, int]] = {}
        self.tokens = tokens or {}

    def create_document(self, document_id: str, sources: Sequence[Source] | None = None) -> None:
        payload = serialize_sources(sources) if sources is not None else None
        self.documents[document_id] = (payload, 1)

    def put_raw(self, document_id: str, payload: str | None) -> None:
        """Replace the stored payload verbatim, as another client might."""
        _, revision = self.documents.get(document_id, (None, 0))
        self.documents[document_id] = (payload, revision + 1)

    @staticmethod
    def _tag(document_id: str, revision: int) -> str:
        return f'W/"{document_id}-{revision}"'

    async def fetch(self, document_id: str | None, revision_tag: str | None = None) -> FetchResult:
        if not document_id:
            return FetchResult(status=FetchStatus.OK, sources=DEFAULT_SOURCES, revision_tag=None)
        if document_id not in self.documents:
            raise NotFoundError(texts.REMOTE_NOT_FOUND.format(gist_id=document_id))

        payload, revision = self.documents[document_id]
        current_tag = self._tag(document_id, revision)
        if revision_tag is not None and revision_tag == current_tag:
            return FetchResult(status=FetchStatus.UNCHANGED, sources=None, revision_tag=revision_tag)
        return FetchResult(status=FetchStatus.OK, sources=parse_sources(payload), revision_tag=current_tag)

    async def write(self, document_id: str | None, credential: str | None, sources: Sequence[Source]) -> WriteResult:
        if not document_id or not credential:
            raise ConfigError(texts.STORAGE_CONFIG_REQUIRED)
        if document_id not in self.documents:
            raise NotFoundError(texts.REMOTE_NOT_FOUND.format(gist_id=document_id))

        if credential not in self.tokens:
            raise RemoteError(401, "Bad credentials")
        if "gist" not in self.tokens[credential]:
            raise RemoteError(404, "Not Found")

        self.put_raw(document_id, serialize_sources(sources))
        _, revision = self.documents[document_id]
        return WriteResult(revision_tag=self._tag(document_id, revision))

    async def test_connection(self, document_id: str | None, credential: str | None) -> ConnectionTestResult:
        if not document_id or not credential:
            return ConnectionTestResult(success=False, message=texts.CONNECTION_FIELDS_REQUIRED)
        if document_id not in self.documents:
            detail = texts.CONNECTION_NOT_FOUND.format(gist_id=document_id)
            return ConnectionTestResult(success=False, message=texts.CONNECTION_FAILED.format(detail=detail))
        if credential not in self.tokens:
            return ConnectionTestResult(
                success=False, message=texts.CONNECTION_FAILED.format(detail=texts.CONNECTION_BAD_TOKEN)
            )
        if "gist" not in self.tokens[credential]:
            return ConnectionTestResult(success=False, message=texts.CONNECTION_MISSING_SCOPE)
        return ConnectionTestResult(success=True, message=texts.CONNECTION_OK)
