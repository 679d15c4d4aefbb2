"""One-shot flash messages kept in the user's session.

Messages are stored the way ``flask.flash`` stores them (``(category,
message)`` pairs under ``_flashes``), so ``get_flashed_messages`` sees the
same queue. The session is taken as an argument instead of the request-global
proxy so handlers and tests can pass any mapping.
"""

from __future__ import annotations

from typing import List, MutableMapping

FLASH_SESSION_KEY = "_flashes"
DEFAULT_CATEGORY = "message"


def push_flash(
    session: MutableMapping, message: str, category: str = DEFAULT_CATEGORY
) -> None:
    """Queue ``message`` for the next rendered page in this session."""

    messages = list(session.get(FLASH_SESSION_KEY, []))
    messages.append((category, message))
    # Reassign so cookie-backed sessions notice the change.
    session[FLASH_SESSION_KEY] = messages


def pop_flashes(session: MutableMapping) -> List[str]:
    """Return every queued message text and clear the queue."""

    return [message for _category, message in session.pop(FLASH_SESSION_KEY, None) or []]


__all__ = ["DEFAULT_CATEGORY", "FLASH_SESSION_KEY", "push_flash", "pop_flashes"]
