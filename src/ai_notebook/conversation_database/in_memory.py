from ai_notebook.conversation_database.data_models.message import ChatMessage, MessageLog
from ai_notebook.conversation_database.data_models.note import Note, NoteLog


class InMemoryMessageLog(MessageLog):
    def __init__(self) -> None:
        self.messages: list[ChatMessage] = []

    def list_messages(self) -> list[ChatMessage]:
        return list(self.messages)

    def append(self, *messages: ChatMessage) -> None:
        self.messages.extend(messages)

    def clear(self) -> None:
        self.messages = []


class InMemoryNoteLog(NoteLog):
    def __init__(self) -> None:
        self.notes: list[Note] = []

    def list_notes(self) -> list[Note]:
        return list(self.notes)

    def add(self, note: Note) -> bool:
        if any(existing.source_message_id == note.source_message_id for existing in self.notes):
            return False
        self.notes.insert(0, note)
        return True

    def delete(self, note_id: str) -> None:
        self.notes = [note for note in self.notes if note.id != note_id]

    def clear(self) -> None:
        self.notes = []
