"""
Session state manager.

'SessionStateManager' is the single owner of a session's 'SessionState' and the
hub between the remote store, the credential store, the conversation logs and
the query orchestrator. Every operation consults 'state.role' instead of
branching on separate admin and guest code paths.

Synchronisation rules:

    Initial load  'load' fetches without a revision tag. On failure the session
                  falls back to 'DEFAULT_SOURCES', records a user-visible error
                  and keeps no revision tag, which also disables polling.
    Polling       'poll_once' is skipped while the draft is dirty or without a
                  revision tag. A remote collection that differs from the
                  published one replaces it; an admin's draft follows it, a
                  guest's conversation is reset. A new revision with the same
                  sources only moves the tag. Poll failures are logged, never
                  shown.
    Saving        'save' writes the draft with the stored credential and makes
                  it the published collection only once the write succeeded.
    Cancelling    'cancel' discards a dirty draft after the user confirms.

Reads are fail-soft, writes fail-loud: write errors are surfaced through the
notifier and never retried. Polls and saves are not locked against each other;
with a single admin the later-resolving request decides the final state.
"""

from collections.abc import Awaitable, Callable, Mapping

from loguru import logger

from ai_notebook import texts
from ai_notebook.auth import AdminAuthenticator
from ai_notebook.conversation_database.data_models.message import ChatMessage, MessageLog
from ai_notebook.conversation_database.data_models.note import Note, NoteLog
from ai_notebook.conversation_database.in_memory import InMemoryMessageLog, InMemoryNoteLog
from ai_notebook.conversation_database.key_value import KeyValueMessageLog, KeyValueNoteLog
from ai_notebook.credentials import CredentialStore
from ai_notebook.errors import ConfigError, NotebookError, NotFoundError, RateLimitedError
from ai_notebook.notifications import NotificationType, Notifier
from ai_notebook.orchestrator import QueryOrchestrator
from ai_notebook.persistence.base import KeyValueStore
from ai_notebook.session.polling import PollingTask
from ai_notebook.session.state import SessionPhase, SessionRole, SessionState
from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source, SourceContent, sources_equal
from ai_notebook.storage.base import ConnectionTestResult, FetchStatus, SourceStore
from ai_notebook.utils.database import generate_uid

Confirm = Callable[[str], Awaitable[bool]]

DEFAULT_POLL_INTERVAL_SECONDS = 20.0


async def decline(message: str) -> bool:
    logger.warning(f"No confirmation handler configured, declining: {message}")
    return False


class SessionStateManager:
    """
    Owner of one session's source collections, role and conversation logs.

    Attributes:
        store: Remote store holding the published collection.
        document_id: Id of the remote document; empty means unconfigured, in
            which case the default sources are served and nothing can be saved.
        credentials: Holder of the admin write token.
        orchestrator: Answers questions against the published collection.
        notifier: Receives every user-facing success, error and info message.
        authenticator: Checks admin logins. None disables admin login.
        confirm: Asks the user a yes/no question (discard draft, log out,
            new chat).
        state: The session state; read it, change it through the methods.
    """

    def __init__(
        self,
        store: SourceStore,
        document_id: str | None,
        credentials: CredentialStore,
        orchestrator: QueryOrchestrator,
        notifier: Notifier,
        storage: KeyValueStore,
        authenticator: AdminAuthenticator | None = None,
        confirm: Confirm = decline,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self.store = store
        self.document_id = document_id
        self.credentials = credentials
        self.orchestrator = orchestrator
        self.notifier = notifier
        self.authenticator = authenticator
        self.confirm = confirm
        self.state = SessionState()

        self.admin_messages: MessageLog = KeyValueMessageLog(storage)
        self.admin_notes: NoteLog = KeyValueNoteLog(storage)
        self.guest_messages: MessageLog = InMemoryMessageLog()
        self.guest_notes: NoteLog = InMemoryNoteLog()

        self.polling = PollingTask(self.poll_once, poll_interval_seconds)

    # Views

    @property
    def is_admin(self) -> bool:
        return self.state.is_admin

    @property
    def is_dirty(self) -> bool:
        return self.state.is_dirty

    @property
    def sources(self) -> tuple[Source, ...]:
        """The published collection, used for answering regardless of role."""
        return self.state.published

    @property
    def visible_sources(self) -> tuple[Source, ...]:
        """What the source panel shows: the draft for an admin, the published collection otherwise."""
        return self.state.draft if self.is_admin else self.state.published

    @property
    def messages(self) -> MessageLog:
        return self.admin_messages if self.is_admin else self.guest_messages

    @property
    def notes(self) -> NoteLog:
        return self.admin_notes if self.is_admin else self.guest_notes

    @property
    def needs_configuration(self) -> bool:
        return self.is_admin and self.credentials.write_token is None

    @property
    def credential_is_stale(self) -> bool:
        return self.credentials.is_stale()

    # Loading and polling

    async def load(self) -> None:
        """Fetch the published collection for the first time."""
        self.state.phase = SessionPhase.LOADING
        self.state.load_error = None
        try:
            result = await self.store.fetch(self.document_id)
            if result.status is not FetchStatus.OK or result.sources is None:
                raise NotebookError(texts.LOAD_FAILED)
            self.state.published = result.sources
            self.state.draft = result.sources
            self.state.revision_tag = result.revision_tag
            logger.info(f"Loaded {len(result.sources)} sources (revision {result.revision_tag})")
        except NotebookError as exc:
            logger.error(f"Failed to fetch sources: {exc}")
            if isinstance(exc, NotFoundError):
                self.state.load_error = texts.LOAD_NOT_FOUND.format(gist_id=self.document_id)
            elif isinstance(exc, RateLimitedError):
                self.state.load_error = texts.LOAD_RATE_LIMITED
            else:
                self.state.load_error = texts.LOAD_FAILED
            self.state.published = DEFAULT_SOURCES
            self.state.draft = DEFAULT_SOURCES
            self.state.revision_tag = None
        finally:
            self.state.phase = SessionPhase.READY

    def dismiss_error(self) -> None:
        self.state.load_error = None

    async def poll_once(self) -> None:
        """Pick up a remote change, unless the draft holds unsaved edits."""
        if self.state.is_dirty or not self.state.revision_tag:
            logger.debug("Skipping poll (unsaved changes or no revision tag)")
            return

        try:
            result = await self.store.fetch(self.document_id, self.state.revision_tag)
        except NotebookError as exc:
            logger.error(f"Polling for source updates failed: {exc}")
            return

        if result.status is FetchStatus.UNCHANGED or result.sources is None:
            return
        # Edits made while the request was in flight win over the remote update.
        if self.state.is_dirty:
            logger.info("Source update detected while the draft has unsaved changes, ignoring it")
            return
        if sources_equal(result.sources, self.state.published):
            logger.debug("Remote revision changed but its sources did not")
            self.state.revision_tag = result.revision_tag
            return

        logger.info("Source update detected, refreshing data")
        self.state.published = result.sources
        self.state.draft = result.sources
        self.state.revision_tag = result.revision_tag
        if self.is_admin:
            self.notifier.notify(texts.REMOTE_UPDATED_ADMIN, NotificationType.INFO)
        else:
            self.guest_messages.clear()
            self.notifier.notify(texts.REMOTE_UPDATED_GUEST, NotificationType.INFO)

    def start_polling(self) -> PollingTask:
        self.polling.start()
        return self.polling

    async def close(self) -> None:
        await self.polling.stop()

    # Draft editing

    def add_source(
        self, title: str, content: SourceContent | Mapping[str, str], file_name: str | None = None
    ) -> Source | None:
        """Append a new source to the draft. Admin only; returns None otherwise."""
        if not self.is_admin:
            return None
        source = Source(
            id=generate_uid("source"),
            title=title,
            file_name=file_name,
            content=SourceContent.model_validate(content),
        )
        self.state.draft = (*self.state.draft, source)
        return source

    def delete_source(self, source_id: str) -> None:
        if not self.is_admin:
            return
        self.state.draft = tuple(source for source in self.state.draft if source.id != source_id)

    async def save(self) -> bool:
        """Publish the draft.

        Returns:
            True when the remote write succeeded, False when it failed (the
            failure has been notified and nothing changed locally).

        Raises:
            ConfigError: No write credential is stored. No request is made.
        """
        token = self.credentials.write_token
        if token is None:
            self.notifier.notify(texts.SAVE_NO_CREDENTIAL, NotificationType.ERROR)
            raise ConfigError(texts.SAVE_NO_CREDENTIAL)
        if not self.is_admin:
            logger.warning("Ignoring save outside an admin session")
            return False

        draft = self.state.draft
        try:
            result = await self.store.write(self.document_id, token, draft)
        except NotebookError as exc:
            logger.error(f"Failed to save sources: {exc}")
            self.notifier.notify(texts.SAVE_FAILED.format(detail=exc), NotificationType.ERROR)
            return False

        self.state.published = draft
        self.state.revision_tag = result.revision_tag
        self.notifier.notify(texts.SAVE_SUCCEEDED, NotificationType.SUCCESS)
        return True

    async def cancel(self) -> bool:
        """Discard the draft. Returns False when the user declined."""
        if not self.state.is_dirty:
            return True
        if not await self.confirm(texts.CONFIRM_DISCARD):
            return False
        self.state.draft = self.state.published
        return True

    # Role changes

    def login(self, username: str, password: str) -> bool:
        if self.authenticator is None or not self.authenticator.authenticate(username, password):
            logger.info("Admin login rejected")
            return False
        self.state.role = SessionRole.ADMIN
        self.state.draft = self.state.published
        self.guest_messages.clear()
        self.guest_notes.clear()
        logger.info("Admin logged in")
        if self.credentials.is_stale():
            self.notifier.notify(
                texts.CREDENTIAL_STALE.format(days=self.credentials.max_age_days), NotificationType.INFO
            )
        return True

    async def logout(self) -> bool:
        if not self.is_admin:
            return True
        if not await self.confirm(texts.CONFIRM_LOGOUT):
            return False
        self.state.role = SessionRole.GUEST
        self.state.draft = self.state.published
        self.guest_messages.clear()
        self.guest_notes.clear()
        logger.info("Admin logged out")
        return True

    # Credential settings

    def save_credential(self, write_token: str) -> None:
        if not write_token.strip():
            raise ConfigError(texts.CREDENTIAL_EMPTY)
        self.credentials.save(write_token.strip())
        self.notifier.notify(texts.CREDENTIAL_SAVED, NotificationType.SUCCESS)

    async def test_connection(self, write_token: str | None = None) -> ConnectionTestResult:
        """Check the given token, or the stored one, against the configured document."""
        token = write_token if write_token is not None else self.credentials.write_token
        return await self.store.test_connection(self.document_id, token)

    # Conversation

    async def ask(self, question: str) -> ChatMessage:
        """Answer from the published collection into the active role's log."""
        return await self.orchestrator.ask(
            question,
            self.state.published,
            self.messages,
            current_sources=lambda: self.state.published,
        )

    async def start_new_chat(self) -> bool:
        if not await self.confirm(texts.CONFIRM_NEW_CHAT):
            return False
        self.messages.clear()
        return True

    def add_note(self, message: ChatMessage) -> Note | None:
        """Pin 'message'. Returns None when it is already pinned."""
        note = Note(id=generate_uid("note"), content=message.text, source_message_id=message.id)
        return note if self.notes.add(note) else None

    def delete_note(self, note_id: str) -> None:
        self.notes.delete(note_id)
