"""
Identifier generation.

Ids are timestamp-derived ('source-1718000000000') so they sort roughly by
creation time and stay readable in the Gist JSON. Two ids requested within the
same millisecond get a numeric suffix to keep them unique within the process.
"""

import itertools
import threading

from ai_notebook.utils.time import get_current_timestamp

_lock = threading.Lock()
_last_timestamp = 0
_sequence = itertools.count()


def generate_uid(prefix: str) -> str:
    global _last_timestamp, _sequence
    with _lock:
        timestamp = get_current_timestamp()
        if timestamp > _last_timestamp:
            _last_timestamp = timestamp
            _sequence = itertools.count()
            return f"{prefix}-{timestamp}"
        return f"{prefix}-{_last_timestamp}-{next(_sequence) + 1}"
