"""
Conversation message data model and log interface.

A conversation is an append-only list of messages: each question is stored as
a USER message immediately followed by the MODEL answer. Citations on a MODEL
message carry the source title resolved at answer time, so the history stays
readable after the cited source is deleted.

Concrete logs: 'InMemoryMessageLog' (guest, lives for the session) and
'KeyValueMessageLog' (admin, persisted across restarts).
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(StrEnum):
    USER = "user"
    MODEL = "model"


class Citation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(alias="sourceId")
    source_title: str = Field(alias="sourceTitle")
    quote: str


class ChatMessage(BaseModel):
    id: str
    role: MessageRole
    text: str
    citations: list[Citation] | None = None


class MessageLog(ABC):
    """Abstract append-only message history for one role."""

    @abstractmethod
    def list_messages(self) -> list[ChatMessage]:
        pass

    @abstractmethod
    def append(self, *messages: ChatMessage) -> None:
        """Append 'messages' in the order given."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
