"""Tests for the source model, payload parsing and id generation."""

import pytest

from ai_notebook.errors import NotFoundError
from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source, sources_equal
from ai_notebook.storage.base import FetchStatus, parse_sources, serialize_sources
from ai_notebook.storage.in_memory import InMemorySourceStore
from ai_notebook.utils.database import generate_uid
from tests.fakes import make_source


def test_sources_equal_is_order_sensitive() -> None:
    a, b = make_source("a"), make_source("b")

    assert sources_equal((a, b), [a, b]) is True
    assert sources_equal((a, b), (b, a)) is False
    assert sources_equal((a,), (a, b)) is False
    assert sources_equal((a,), (make_source("a", data="changed"),)) is False


def test_document_form_uses_camel_case_and_omits_missing_file_name() -> None:
    source = Source.model_validate({"id": "x", "title": "T", "content": {"mimeType": "text/plain", "data": "d"}})

    assert source.to_document() == {"id": "x", "title": "T", "content": {"mimeType": "text/plain", "data": "d"}}


def test_serialized_payload_parses_back() -> None:
    sources = (make_source("a"), make_source("b"))

    assert parse_sources(serialize_sources(sources)) == sources
    assert parse_sources(None) == DEFAULT_SOURCES


def test_generated_ids_are_unique() -> None:
    ids = {generate_uid("source") for _ in range(500)}

    assert len(ids) == 500
    assert all(uid.startswith("source-") for uid in ids)


@pytest.mark.asyncio
async def test_in_memory_store_conditional_fetch_and_round_trip() -> None:
    store = InMemorySourceStore(tokens={"t": {"gist"}})
    store.create_document("doc", [make_source("a")])

    first = await store.fetch("doc")
    second = await store.fetch("doc", first.revision_tag)
    written = await store.write("doc", "t", (make_source("b"), make_source("a")))
    third = await store.fetch("doc", first.revision_tag)

    assert second.status is FetchStatus.UNCHANGED
    assert third.status is FetchStatus.OK
    assert third.revision_tag == written.revision_tag
    assert third.sources == (make_source("b"), make_source("a"))
    with pytest.raises(NotFoundError):
        await store.fetch("other")
