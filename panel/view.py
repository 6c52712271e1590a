"""Control panel page rendering."""

from html import escape

from . import config
from .models import StatusResponse
from .state import PanelState
from .status import STARTABLE, Status, appearance

LOADING = "bg-blue-100 text-blue-700"
TOKEN_MISSING = "bg-red-100 text-red-700"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="{refresh}">
<title>{title}</title>
<script src="https://cdn.tailwindcss.com"></script>
</head>
<body>
<main class="flex min-h-screen flex-col items-center justify-center p-24">
<div class="w-full max-w-md p-6 bg-white rounded-lg shadow-xl">
<h1 class="text-2xl font-bold mb-6 text-center">{title}</h1>
{body}
</div>
</main>
</body>
</html>
"""


def _banner(color: str, message: str) -> str:
    return f'<div class="p-4 rounded-md mb-4 text-center {color}">{escape(message)}</div>'


def _open_link(url: str) -> str:
    return (
        f'<a href="{escape(url, quote=True)}" target="_blank" rel="noopener noreferrer" '
        'class="block w-full py-2 px-4 bg-blue-500 text-white rounded hover:bg-blue-600 text-center">'
        "Open Application</a>"
    )


def _start_button(starting: bool) -> str:
    if starting:
        return (
            '<form method="post" action="/start">'
            '<button type="submit" disabled class="w-full py-2 px-4 rounded text-white bg-gray-400">'
            "Starting...</button></form>"
        )
    return (
        '<form method="post" action="/start">'
        '<button type="submit" class="w-full py-2 px-4 rounded text-white bg-green-500 hover:bg-green-600">'
        "Start Codespace</button></form>"
    )


def render_body(state: PanelState, has_token: bool) -> str:
    """Render the panel contents for a state."""
    if state.loading and state.generation == 0:
        return _banner(LOADING, "Loading...")
    if not has_token:
        return _banner(
            TOKEN_MISSING,
            "GitHub token not found. Please set GITHUB_TOKEN in the panel's environment.",
        )

    color, message = appearance(state.status)
    parts = [_banner(color, message)]

    if state.status == Status.RUNNING.value and state.url:
        parts.append(_open_link(state.url))

    if state.status in STARTABLE:
        parts.append(_start_button(state.starting))

    if state.starting:
        parts.append('<div class="mt-4 text-sm text-gray-600">This may take a few minutes...</div>')

    return "\n".join(parts)


def render_page(state: PanelState, has_token: bool) -> str:
    """Render the full control panel page."""
    return _PAGE.format(
        refresh=int(config.POLL_INTERVAL),
        title=escape(config.PANEL_TITLE),
        body=render_body(state, has_token),
    )


def status_response(state: PanelState, has_token: bool) -> StatusResponse:
    """Build the JSON view of a state."""
    color, message = appearance(state.status)
    return StatusResponse(
        status=state.status,
        color=color,
        message=message,
        url=state.url,
        codespace_id=state.codespace_id,
        starting=state.starting,
        loading=state.loading,
        has_token=has_token,
        checked_at=state.checked_at.isoformat() if state.checked_at else None,
    )
