"""
Note data model and log interface.

A note pins the text of one conversation message. There is at most one note per
message ('source_message_id' is unique within a log); notes are created and
deleted but never edited. Logs keep the newest note first.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    source_message_id: str = Field(alias="sourceMessageId")


class NoteLog(ABC):
    """Abstract note list for one role."""

    @abstractmethod
    def list_notes(self) -> list[Note]:
        pass

    @abstractmethod
    def add(self, note: Note) -> bool:
        """Insert 'note' at the front. Returns False when its message already has a note."""
        pass

    @abstractmethod
    def delete(self, note_id: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
