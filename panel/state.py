"""Panel state - the current view state, replaced atomically.

Checks may overlap (the periodic refresh and the start loop both run them).
Each check takes a generation number before its first network call and may
only commit if no newer generation has been issued since.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .models import CheckResult
from .status import Status

logger = logging.getLogger(__name__)


class PanelState(BaseModel):
    """Immutable snapshot of what the panel shows."""

    model_config = ConfigDict(frozen=True)

    status: str = Status.CHECKING.value
    url: str = ""
    codespace_id: Optional[str] = None
    starting: bool = False
    loading: bool = True
    generation: int = 0
    checked_at: Optional[datetime] = None


class StateStore:
    """Holds the current PanelState and serializes replacements."""

    def __init__(self):
        self._lock = threading.Lock()
        self._state = PanelState()
        self._issued = 0

    @property
    def state(self) -> PanelState:
        return self._state

    def begin_check(self) -> int:
        """Issue a new check generation and mark the panel as loading."""
        with self._lock:
            self._issued += 1
            self._state = self._state.model_copy(update={"loading": True})
            return self._issued

    def commit_check(self, generation: int, result: CheckResult) -> bool:
        """Commit a check result if it is still the latest generation.

        Returns:
            True if committed, False if the result was stale and dropped
        """
        with self._lock:
            if generation != self._issued:
                logger.debug(f"Dropping stale check {generation} (latest is {self._issued})")
                return False
            update = {
                "status": result.status,
                "loading": False,
                "generation": generation,
                "checked_at": datetime.now(timezone.utc),
            }
            if result.url:
                update["url"] = result.url
            if result.codespace_id is not None:
                update["codespace_id"] = result.codespace_id
            self._state = self._state.model_copy(update=update)
            return True

    def set_status(self, status: str) -> None:
        """Set the status outside a check.

        Checks still in flight become stale so they cannot overwrite it.
        """
        with self._lock:
            self._issued += 1
            self._state = self._state.model_copy(
                update={"status": status, "loading": False, "generation": self._issued}
            )

    def try_begin_start(self) -> bool:
        """Set the starting flag. Returns False if a start is already running."""
        with self._lock:
            if self._state.starting:
                return False
            self._state = self._state.model_copy(update={"starting": True})
            return True

    def end_start(self) -> None:
        """Clear the starting flag."""
        with self._lock:
            self._state = self._state.model_copy(update={"starting": False})

    def reset(self) -> None:
        """Return to the initial state."""
        with self._lock:
            self._state = PanelState()
            self._issued = 0


# Process-wide store. State lives for the life of the process only.
store = StateStore()
