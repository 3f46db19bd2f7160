"""
GitHub Gist backed source store.

The whole collection lives in one file, 'sources.json', inside a Gist. Reads
are anonymous conditional GETs ('If-None-Match' with the last ETag, answered by
304 when nothing changed). Writes are authenticated PATCH requests that replace
only that file. The connection test performs an authenticated GET and inspects
'X-OAuth-Scopes' for the 'gist' scope, since a token without it can read but
not write.

An 'httpx.AsyncClient' can be injected (tests pass one built on
'httpx.MockTransport'); otherwise a client is opened per call. No request
timeout is set: transport failures surface however the HTTP layer reports them.
"""

from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger

from ai_notebook import texts
from ai_notebook.errors import ConfigError, NetworkError, NotFoundError, RateLimitedError, RemoteError, WriteError
from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source
from ai_notebook.storage.base import (
    SOURCES_FILENAME,
    ConnectionTestResult,
    FetchResult,
    FetchStatus,
    SourceStore,
    WriteResult,
    parse_sources,
    serialize_sources,
)

GITHUB_API_BASE_URL = "https://api.github.com/gists"
GITHUB_ACCEPT = "application/vnd.github.v3+json"
REQUIRED_SCOPE = "gist"

# Failures raised before or while talking to GitHub; an invalid URL is not an HTTPError.
REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


class GistSourceStore(SourceStore):
    """
    'SourceStore' speaking the GitHub Gist REST API.

    Attributes:
        base_url: Gist collection endpoint; the document id is appended.
        client: Optional shared HTTP client. When None, each call opens and
            closes its own client.
    """

    def __init__(self, base_url: str = GITHUB_API_BASE_URL, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client

    def _url(self, document_id: str) -> str:
        return f"{self.base_url}/{document_id}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self.client is not None:
            return await self.client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=None) as client:
            return await client.request(method, url, **kwargs)

    async def fetch(self, document_id: str | None, revision_tag: str | None = None) -> FetchResult:
        if not document_id:
            logger.warning("Gist ID is missing, returning default sources")
            return FetchResult(status=FetchStatus.OK, sources=DEFAULT_SOURCES, revision_tag=None)

        headers = {"Accept": GITHUB_ACCEPT}
        if revision_tag:
            headers["If-None-Match"] = revision_tag
            logger.debug(f"Conditional fetch of gist {document_id} with ETag {revision_tag}")

        try:
            response = await self._request("GET", self._url(document_id), headers=headers)
        except REQUEST_ERRORS as exc:
            logger.error(f"Could not fetch sources from gist {document_id}: {exc}")
            raise NetworkError(texts.REMOTE_NETWORK_ERROR) from exc

        if response.status_code == 304:
            logger.debug(f"Gist {document_id} not modified")
            return FetchResult(status=FetchStatus.UNCHANGED, sources=None, revision_tag=revision_tag)
        if response.status_code == 404:
            raise NotFoundError(texts.REMOTE_NOT_FOUND.format(gist_id=document_id))
        if response.status_code in (403, 429):
            raise RateLimitedError(texts.REMOTE_RATE_LIMITED)
        if not response.is_success:
            raise RemoteError(response.status_code, response.reason_phrase)

        new_tag = response.headers.get("ETag")
        try:
            data = response.json()
        except ValueError as exc:
            logger.error(f"Gist {document_id} returned a body that is not JSON: {exc}")
            raise NetworkError(texts.REMOTE_NETWORK_ERROR) from exc

        files = data.get("files") if isinstance(data, dict) else None
        entry = files.get(SOURCES_FILENAME) if isinstance(files, dict) else None
        content = entry.get("content") if isinstance(entry, dict) else None
        return FetchResult(status=FetchStatus.OK, sources=parse_sources(content), revision_tag=new_tag)

    async def write(self, document_id: str | None, credential: str | None, sources: Sequence[Source]) -> WriteResult:
        if not document_id or not credential:
            raise ConfigError(texts.STORAGE_CONFIG_REQUIRED)

        payload = {"files": {SOURCES_FILENAME: {"content": serialize_sources(sources)}}}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"token {credential}",
            "Accept": GITHUB_ACCEPT,
        }
        try:
            response = await self._request("PATCH", self._url(document_id), headers=headers, json=payload)
        except REQUEST_ERRORS as exc:
            logger.error(f"Could not save sources to gist {document_id}: {exc}")
            raise WriteError(texts.REMOTE_WRITE_FAILED) from exc

        if not response.is_success:
            raise RemoteError(response.status_code, _error_message(response))

        logger.info(f"Saved {len(sources)} sources to gist {document_id}")
        return WriteResult(revision_tag=response.headers.get("ETag"))

    async def test_connection(self, document_id: str | None, credential: str | None) -> ConnectionTestResult:
        if not document_id or not credential:
            return ConnectionTestResult(success=False, message=texts.CONNECTION_FIELDS_REQUIRED)

        headers = {
            "Authorization": f"token {credential}",
            "Accept": GITHUB_ACCEPT,
            "Cache-Control": "no-cache",
        }
        try:
            response = await self._request("GET", self._url(document_id), headers=headers)
        except REQUEST_ERRORS as exc:
            return ConnectionTestResult(success=False, message=texts.CONNECTION_FAILED.format(detail=exc))

        if not response.is_success:
            if response.status_code == 404:
                detail = texts.CONNECTION_NOT_FOUND.format(gist_id=document_id)
            elif response.status_code == 401:
                detail = texts.CONNECTION_BAD_TOKEN
            else:
                detail = texts.CONNECTION_API_ERROR.format(reason=response.reason_phrase)
            return ConnectionTestResult(success=False, message=texts.CONNECTION_FAILED.format(detail=detail))

        scopes = [scope.strip() for scope in response.headers.get("X-OAuth-Scopes", "").split(",")]
        if REQUIRED_SCOPE not in scopes:
            return ConnectionTestResult(success=False, message=texts.CONNECTION_MISSING_SCOPE)
        return ConnectionTestResult(success=True, message=texts.CONNECTION_OK)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase
