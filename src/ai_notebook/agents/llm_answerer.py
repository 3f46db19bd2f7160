"""
LLM-backed answering service.

Sources are injected into the prompt inside XML tags carrying their ids, and
the model is asked to reply with a JSON object:

    {"answer": "...", "citations": [{"sourceId": "...", "quote": "..."}]}

Text sources are inlined; other mime types (base64 payloads such as PDFs or
images) cannot be read by a text model and are listed by title and file name
only. A reply that does not parse is returned as the answer with no citations.
"""

import re
from collections.abc import Sequence
from textwrap import dedent
from xml.sax.saxutils import quoteattr

from loguru import logger
from pydantic import ValidationError

from ai_notebook.agents.base import Answer, AnsweringService
from ai_notebook.llms.base import LLM, LLMMessage, Roles
from ai_notebook.sources.data_models import Source

SYSTEM_PROMPT = dedent("""
    You are a helpful assistant answering questions strictly from the sources you are given.

    Rules:
    - Use the provided sources as your only source of truth. Do not rely on outside knowledge.
    - If the answer cannot be found in the sources, clearly say that you do not know.
    - Support every claim with a citation: the id of the source and a short verbatim quote from it.
    - Answer in the language of the question.

    Reply with a single JSON object and nothing else:
    {"answer": "<your answer>", "citations": [{"sourceId": "<source id>", "quote": "<verbatim quote>"}]}
""").strip()

CODE_FENCE = re.compile(r"^```[A-Za-z]*\s*(.*?)\s*```$", re.DOTALL)


def build_query_with_sources(question: str, sources: Sequence[Source]) -> str:
    """Format the question and the sources, each inside a '<source>' tag carrying its id."""
    blocks = []
    for source in sources:
        if source.is_text:
            body = source.content.data
        else:
            body = f"[{source.content.mime_type} attachment '{source.file_name or source.title}', content not shown]"
        blocks.append(f"<source id={quoteattr(source.id)} title={quoteattr(source.title)}>\n{body}\n</source>")
    sources_xml = "\n".join(blocks) if blocks else "No sources found."
    return f"Question: {question}\n\nSources:\n{sources_xml}"


class LLMAnsweringService(AnsweringService):
    def __init__(self, llm: LLM, system_prompt: str = SYSTEM_PROMPT) -> None:
        self.llm = llm
        self.system_prompt = system_prompt

    async def answer(self, question: str, sources: Sequence[Source]) -> Answer:
        reply = await self.llm.generate(
            [
                LLMMessage(role=Roles.SYSTEM, content=self.system_prompt),
                LLMMessage(role=Roles.USER, content=build_query_with_sources(question, sources)),
            ]
        )
        content = reply.content.strip()
        if fence := CODE_FENCE.match(content):
            content = fence.group(1)
        try:
            return Answer.model_validate_json(content)
        except ValidationError:
            logger.warning("Model reply is not a valid answer object, returning it without citations")
            return Answer(answer=reply.content.strip(), citations=[])
