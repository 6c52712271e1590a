"""HTTP response helpers for the panel."""

from fastapi.responses import HTMLResponse, RedirectResponse


def page(content: str) -> HTMLResponse:
    """Serve a rendered page. Never cached, since it reflects live status."""
    return HTMLResponse(
        content=content,
        headers={"Cache-Control": "no-store"},
    )


def back_to_panel() -> RedirectResponse:
    """Redirect a form post back to the panel (303 so the browser uses GET)."""
    return RedirectResponse(url="/", status_code=303)
