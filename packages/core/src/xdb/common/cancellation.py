from __future__ import annotations

import threading


class CancellationFlag:
    """Cooperative cancellation signal owned by a single query session.

    ``set`` may be called from any thread; the session only reads the flag
    between row fetches, so a fetch that is already blocked on the cursor is
    never interrupted.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()
