from ai_notebook.sources.data_models import DEFAULT_SOURCES, Source, SourceContent, sources_equal

__all__ = ["DEFAULT_SOURCES", "Source", "SourceContent", "sources_equal"]
