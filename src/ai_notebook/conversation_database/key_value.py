"""
Persisted message and note logs.

Each log is one JSON array stored under a fixed key of a 'KeyValueStore'. The
array is decoded on every read and rewritten on every change, mirroring how a
browser profile keeps the admin's chat between visits. An unreadable record is
logged and treated as empty rather than failing the session.
"""

from typing import TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from ai_notebook.conversation_database.data_models.message import ChatMessage, MessageLog
from ai_notebook.conversation_database.data_models.note import Note, NoteLog
from ai_notebook.persistence.base import KeyValueStore

ADMIN_MESSAGES_KEY = "ai-notebook-admin-messages"
ADMIN_NOTES_KEY = "ai-notebook-admin-notes"

T = TypeVar("T", bound=BaseModel)


class _KeyValueList:
    def __init__(self, storage: KeyValueStore, key: str, adapter: TypeAdapter[list[T]]) -> None:
        self.storage = storage
        self.key = key
        self.adapter = adapter

    def read(self) -> list[T]:
        raw = self.storage.get(self.key)
        if raw is None:
            return []
        try:
            return self.adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring unreadable record {self.key!r}: {exc.error_count()} validation errors")
            return []

    def write(self, items: list[T]) -> None:
        self.storage.set(self.key, self.adapter.dump_json(items, by_alias=True).decode("utf-8"))


class KeyValueMessageLog(MessageLog):
    def __init__(self, storage: KeyValueStore, key: str = ADMIN_MESSAGES_KEY) -> None:
        self._records = _KeyValueList(storage, key, TypeAdapter(list[ChatMessage]))

    def list_messages(self) -> list[ChatMessage]:
        return self._records.read()

    def append(self, *messages: ChatMessage) -> None:
        self._records.write([*self._records.read(), *messages])

    def clear(self) -> None:
        self._records.write([])


class KeyValueNoteLog(NoteLog):
    def __init__(self, storage: KeyValueStore, key: str = ADMIN_NOTES_KEY) -> None:
        self._records = _KeyValueList(storage, key, TypeAdapter(list[Note]))

    def list_notes(self) -> list[Note]:
        return self._records.read()

    def add(self, note: Note) -> bool:
        notes = self._records.read()
        if any(existing.source_message_id == note.source_message_id for existing in notes):
            return False
        self._records.write([note, *notes])
        return True

    def delete(self, note_id: str) -> None:
        self._records.write([note for note in self._records.read() if note.id != note_id])

    def clear(self) -> None:
        self._records.write([])
