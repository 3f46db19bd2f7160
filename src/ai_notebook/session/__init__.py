from ai_notebook.session.manager import SessionStateManager
from ai_notebook.session.polling import PollingTask
from ai_notebook.session.state import SessionPhase, SessionRole, SessionState

__all__ = ["PollingTask", "SessionPhase", "SessionRole", "SessionState", "SessionStateManager"]
