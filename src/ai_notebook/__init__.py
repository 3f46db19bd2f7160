"""
Source-grounded notebook chatbot.

An admin curates a small set of text sources stored as 'sources.json' inside a
GitHub Gist; visitors ask questions that an LLM answers with citations to those
sources. The 'SessionStateManager' (see 'ai_notebook.session.manager') is the
hub: it owns the published and draft source collections, polls the Gist for
remote changes and routes questions through the 'QueryOrchestrator'.
"""
