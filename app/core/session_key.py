"""Session id minting for chat sessions."""

from __future__ import annotations

import secrets
import time

SESSION_PREFIX = "session"


def mint_session_id(now_ms: int | None = None) -> str:
    """
    Build a new session id: session_<epoch millis>_<random hex>.

    The time component keeps ids roughly sortable; the random part keeps two
    sessions opened in the same millisecond distinct.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{SESSION_PREFIX}_{now_ms}_{secrets.token_hex(8)}"
