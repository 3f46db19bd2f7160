"""
Answering service interface.

The answering service takes a question plus the full source collection and
returns an answer string with citations that reference source ids. It does not
resolve titles; the 'QueryOrchestrator' does that against the collection
current when the answer arrives.

Concrete implementation: 'LLMAnsweringService'.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from ai_notebook.sources.data_models import Source


class RawCitation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(alias="sourceId")
    quote: str = ""


class Answer(BaseModel):
    answer: str
    citations: list[RawCitation] = Field(default_factory=list)


class AnsweringService(ABC):
    @abstractmethod
    async def answer(self, question: str, sources: Sequence[Source]) -> Answer:
        pass
