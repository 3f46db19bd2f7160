"""
Application wiring and a console demo.

'build_session' assembles a 'SessionStateManager' from 'Settings': the Gist
store, the JSON-file backed persistence for the admin's credential and logs,
and an OpenAI-backed answering service. Front ends call it once per visitor
session and drive the returned manager.

Running the module loads the published sources, prints them and answers one
question as a guest:

    OPENAI_API_KEY=... python -m ai_notebook.app
    QUERY="Which courses are offered?" OPENAI_API_KEY=... python -m ai_notebook.app
"""

import asyncio
import os
import sys

from loguru import logger

from ai_notebook.agents.base import AnsweringService
from ai_notebook.agents.llm_answerer import LLMAnsweringService
from ai_notebook.auth import StaticCredentialAuthenticator
from ai_notebook.config import Settings
from ai_notebook.credentials import CredentialStore
from ai_notebook.llms.openai import OpenAILLM
from ai_notebook.notifications import InMemoryNotifier, Notifier
from ai_notebook.orchestrator import QueryOrchestrator
from ai_notebook.persistence.json_file import JsonFileKeyValueStore
from ai_notebook.session.manager import Confirm, SessionStateManager, decline
from ai_notebook.storage.gist import GistSourceStore


def build_answering_service(settings: Settings) -> AnsweringService:
    llm = OpenAILLM(model_name=settings.llm_model, openai_api_key=settings.openai_api_key, json_output=True)
    logger.info(f"LLM backend: OpenAI ({settings.llm_model})")
    return LLMAnsweringService(llm)


def build_session(
    settings: Settings,
    notifier: Notifier | None = None,
    confirm: Confirm = decline,
    answering_service: AnsweringService | None = None,
) -> SessionStateManager:
    storage = JsonFileKeyValueStore(settings.storage_path)
    return SessionStateManager(
        store=GistSourceStore(base_url=settings.github_api_base_url),
        document_id=settings.gist_id,
        credentials=CredentialStore(storage, max_age_days=settings.credential_max_age_days),
        orchestrator=QueryOrchestrator(answering_service or build_answering_service(settings)),
        notifier=notifier or InMemoryNotifier(),
        storage=storage,
        authenticator=StaticCredentialAuthenticator(settings.admin_username, settings.admin_password),
        confirm=confirm,
        poll_interval_seconds=settings.poll_interval_seconds,
    )


async def run_demo(settings: Settings, query: str) -> str:
    session = build_session(settings)
    await session.load()
    if session.state.load_error:
        logger.warning(session.state.load_error)

    print(f"Sources ({len(session.sources)}):")
    for source in session.sources:
        print(f"  {source.id}  |  {source.title!r}")

    session.start_polling()
    try:
        answer = await session.ask(query)
    finally:
        await session.close()

    print(f"\n{answer.text}")
    for citation in answer.citations or []:
        print(f"  [{citation.source_title}] {citation.quote!r}")
    return answer.text


if __name__ == "__main__":
    _settings = Settings.from_env()
    logger.remove()
    logger.add(sys.stderr, level=_settings.log_level)
    if not _settings.openai_api_key:
        raise SystemExit(
            "OPENAI_API_KEY is not set.\n"
            "Either add it as a secret file at /secrets/OPENAI_API_KEY or set the environment variable."
        )
    asyncio.run(run_demo(_settings, os.getenv("QUERY", "What courses does the center offer?")))
