"""Shared pytest fixtures."""

import pytest

from ai_notebook.auth import StaticCredentialAuthenticator
from ai_notebook.credentials import CredentialStore
from ai_notebook.notifications import InMemoryNotifier
from ai_notebook.orchestrator import QueryOrchestrator
from ai_notebook.persistence.in_memory import InMemoryKeyValueStore
from ai_notebook.session.manager import SessionStateManager
from ai_notebook.sources.data_models import Source
from tests.fakes import (
    ADMIN_PASSWORD,
    ADMIN_USER,
    DOCUMENT_ID,
    GOOD_TOKEN,
    READ_ONLY_TOKEN,
    CountingSourceStore,
    ScriptedAnsweringService,
    ScriptedConfirm,
    make_source,
)


@pytest.fixture
def remote_sources() -> tuple[Source, ...]:
    return (make_source("s1"), make_source("s2"))


@pytest.fixture
def store(remote_sources: tuple[Source, ...]) -> CountingSourceStore:
    store = CountingSourceStore(tokens={GOOD_TOKEN: {"gist"}, READ_ONLY_TOKEN: {"read:user"}})
    store.create_document(DOCUMENT_ID, remote_sources)
    return store


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def answering() -> ScriptedAnsweringService:
    return ScriptedAnsweringService()


@pytest.fixture
def confirm() -> ScriptedConfirm:
    return ScriptedConfirm(reply=True)


@pytest.fixture
def session(
    store: CountingSourceStore,
    storage: InMemoryKeyValueStore,
    notifier: InMemoryNotifier,
    answering: ScriptedAnsweringService,
    confirm: ScriptedConfirm,
) -> SessionStateManager:
    return SessionStateManager(
        store=store,
        document_id=DOCUMENT_ID,
        credentials=CredentialStore(storage),
        orchestrator=QueryOrchestrator(answering),
        notifier=notifier,
        storage=storage,
        authenticator=StaticCredentialAuthenticator(ADMIN_USER, ADMIN_PASSWORD),
        confirm=confirm,
        poll_interval_seconds=0.01,
    )
