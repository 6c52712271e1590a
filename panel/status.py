"""Status tags and their on-screen appearance."""

from enum import Enum
from typing import Tuple


class Status(str, Enum):
    """Locally derived status of the codespace and its application."""

    CHECKING = "checking"
    RUNNING = "running"
    STOPPED = "stopped"
    STARTING = "starting"
    NOT_FOUND = "not_found"
    APP_NOT_RUNNING = "app_not_running"
    ERROR = "error"
    NO_TOKEN = "no_token"


# Lifecycle states reported by GitHub that mean the codespace is up.
RUNNING_STATES = frozenset({"running", "available"})

# Statuses from which the start action is offered.
STARTABLE = frozenset({Status.STOPPED.value, Status.ERROR.value, Status.APP_NOT_RUNNING.value})

GREEN = "bg-green-100 text-green-700"
YELLOW = "bg-yellow-100 text-yellow-700"
RED = "bg-red-100 text-red-700"

_APPEARANCE = {
    Status.RUNNING.value: (GREEN, "Application is Running"),
    Status.STOPPED.value: (YELLOW, "Codespace is Stopped"),
    Status.STARTING.value: (YELLOW, "Codespace is Starting..."),
    Status.NOT_FOUND.value: (YELLOW, "Codespace Not Found"),
    Status.APP_NOT_RUNNING.value: (YELLOW, "Flask App Not Running"),
    Status.ERROR.value: (RED, "Error Checking Status"),
    Status.NO_TOKEN.value: (RED, "GitHub Token Not Found"),
}

_DEFAULT_APPEARANCE = (YELLOW, "Checking Status...")


def is_running_state(lifecycle_state: str) -> bool:
    """True if a GitHub lifecycle state means the codespace is up."""
    return lifecycle_state.lower() in RUNNING_STATES


def appearance(status: str) -> Tuple[str, str]:
    """Map a status to its (color class, message).

    Raw lifecycle states that are not one of the known tags fall through to
    the "checking" appearance.
    """
    key = status.value if isinstance(status, Status) else status
    return _APPEARANCE.get(key, _DEFAULT_APPEARANCE)
