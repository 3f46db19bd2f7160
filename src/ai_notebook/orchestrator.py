"""
Query orchestration.

'QueryOrchestrator' turns a question into a USER/MODEL message pair: it calls
the answering service with the full source collection, resolves each citation's
source id to a title and appends both messages to the caller's log. Titles are
resolved against the collection current when the answer arrives, because the
published collection may have been replaced while the answer was generated; an
id that no longer resolves gets a placeholder title instead of failing the turn.
"""

from collections.abc import Callable, Sequence

from loguru import logger

from ai_notebook import texts
from ai_notebook.agents.base import AnsweringService
from ai_notebook.conversation_database.data_models.message import ChatMessage, Citation, MessageLog, MessageRole
from ai_notebook.errors import EmptySourcesError
from ai_notebook.sources.data_models import Source
from ai_notebook.utils.database import generate_uid


class QueryOrchestrator:
    def __init__(self, answering_service: AnsweringService) -> None:
        self.answering_service = answering_service

    async def ask(
        self,
        question: str,
        sources: Sequence[Source],
        log: MessageLog,
        current_sources: Callable[[], Sequence[Source]] | None = None,
    ) -> ChatMessage:
        """Answer 'question' from 'sources' and append the exchange to 'log'.

        Args:
            question: The user's question.
            sources: Collection passed to the answering service.
            log: Conversation log of the active role.
            current_sources: Returns the collection to resolve citation titles
                against once the answer is back. Defaults to 'sources'.

        Returns:
            The appended MODEL message.

        Raises:
            EmptySourcesError: 'sources' is empty; nothing is appended.
        """
        if not sources:
            raise EmptySourcesError(texts.NO_SOURCES)

        user_message = ChatMessage(id=generate_uid("msg"), role=MessageRole.USER, text=question)
        logger.info(f"Question over {len(sources)} sources: {question!r}")
        answer = await self.answering_service.answer(question, list(sources))

        titles = {source.id: source.title for source in (current_sources() if current_sources else sources)}
        citations = []
        for raw in answer.citations:
            title = titles.get(raw.source_id)
            if title is None:
                logger.warning(f"Citation references unknown source {raw.source_id!r}")
                title = texts.UNKNOWN_SOURCE
            citations.append(Citation(source_id=raw.source_id, source_title=title, quote=raw.quote))

        model_message = ChatMessage(
            id=generate_uid("msg"),
            role=MessageRole.MODEL,
            text=answer.answer,
            citations=citations,
        )
        log.append(user_message, model_message)
        return model_message
