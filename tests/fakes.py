"""Fakes and constants shared by the test suite."""

import json
from collections.abc import Sequence

import httpx

from ai_notebook.agents.base import Answer, AnsweringService, RawCitation
from ai_notebook.sources.data_models import Source, SourceContent
from ai_notebook.storage.base import FetchResult, WriteResult
from ai_notebook.storage.in_memory import InMemorySourceStore

DOCUMENT_ID = "abc123"
GOOD_TOKEN = "ghp_good"
READ_ONLY_TOKEN = "ghp_read_only"
ADMIN_USER = "admin"
ADMIN_PASSWORD = "secret"


def make_source(source_id: str, title: str | None = None, data: str = "text") -> Source:
    return Source(
        id=source_id,
        title=title or f"Title {source_id}",
        file_name=f"{source_id}.txt",
        content=SourceContent(mime_type="text/plain", data=data),
    )


class CountingSourceStore(InMemorySourceStore):
    """In-memory store that records every call."""

    def __init__(self, tokens: dict[str, set[str]] | None = None) -> None:
        super().__init__(tokens)
        self.fetch_calls: list[tuple[str | None, str | None]] = []
        self.write_calls: list[tuple[str | None, str | None, tuple[Source, ...]]] = []

    async def fetch(self, document_id: str | None, revision_tag: str | None = None) -> FetchResult:
        self.fetch_calls.append((document_id, revision_tag))
        return await super().fetch(document_id, revision_tag)

    async def write(self, document_id: str | None, credential: str | None, sources: Sequence[Source]) -> WriteResult:
        self.write_calls.append((document_id, credential, tuple(sources)))
        return await super().write(document_id, credential, sources)


class ScriptedAnsweringService(AnsweringService):
    """Returns a fixed answer and records what it was asked."""

    def __init__(self, answer: str = "The answer.", citations: list[RawCitation] | None = None) -> None:
        self.answer_text = answer
        self.citations = citations or []
        self.calls: list[tuple[str, list[Source]]] = []

    async def answer(self, question: str, sources: Sequence[Source]) -> Answer:
        self.calls.append((question, list(sources)))
        return Answer(answer=self.answer_text, citations=self.citations)


class ScriptedConfirm:
    def __init__(self, reply: bool = True) -> None:
        self.reply = reply
        self.prompts: list[str] = []

    async def __call__(self, message: str) -> bool:
        self.prompts.append(message)
        return self.reply


class FakeGistApi:
    """Minimal emulation of the Gist endpoints used by 'GistSourceStore'."""

    def __init__(self, gist_id: str = DOCUMENT_ID, files: dict[str, str] | None = None) -> None:
        self.gist_id = gist_id
        self.files = dict(files or {})
        self.revision = 1
        self.requests: list[httpx.Request] = []

    @property
    def etag(self) -> str:
        return f'W/"rev-{self.revision}"'

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path != f"/gists/{self.gist_id}":
            return httpx.Response(404, json={"message": "Not Found"})
        if request.method == "GET":
            if request.headers.get("If-None-Match") == self.etag:
                return httpx.Response(304, headers={"ETag": self.etag})
            body = {"id": self.gist_id, "files": {name: {"content": content} for name, content in self.files.items()}}
            return httpx.Response(200, json=body, headers={"ETag": self.etag, "X-OAuth-Scopes": "gist, repo"})
        if request.method == "PATCH":
            if request.headers.get("Authorization") != f"token {GOOD_TOKEN}":
                return httpx.Response(401, json={"message": "Bad credentials"})
            payload = json.loads(request.content)
            for name, entry in payload["files"].items():
                self.files[name] = entry["content"]
            self.revision += 1
            return httpx.Response(200, json={"id": self.gist_id}, headers={"ETag": self.etag})
        return httpx.Response(405)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


