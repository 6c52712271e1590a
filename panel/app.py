"""FastAPI application and request handlers."""

import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool

from . import config
from .checker import StatusChecker
from .models import StartResponse, StatusResponse
from .poller import Poller
from .responses import back_to_panel, page
from .starter import Starter
from .state import store
from .view import render_page, status_response

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger(__name__)

checker = StatusChecker(store)
starter = Starter(checker, store)
poller = Poller(checker)


@asynccontextmanager
async def lifespan(app: FastAPI):
    poller.start()
    try:
        yield
    finally:
        await poller.stop()


app = FastAPI(title="Codespace Control Panel", version=config.PANEL_VERSION, lifespan=lifespan)


def _has_token() -> bool:
    return config.github_token() is not None


def _schedule_start(background_tasks: BackgroundTasks) -> None:
    """Queue a start, or fail fast if there is nothing to start.

    Raises:
        HTTPException: 409 if a start is running, 400 if no codespace is known
    """
    state = store.state
    if state.starting:
        raise HTTPException(409, "Codespace start already in progress")
    if not state.codespace_id or not _has_token():
        # Sets the error status without touching the network.
        starter.start()
        raise HTTPException(400, "No codespace ID or GitHub token available")
    # Claimed before responding so the next page already shows it.
    if not store.try_begin_start():
        raise HTTPException(409, "Codespace start already in progress")
    logger.info(f"Start requested for codespace {state.codespace_id}")
    background_tasks.add_task(starter.run_claimed)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/")
async def index():
    """Render the control panel."""
    return page(render_page(store.state, _has_token()))


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Current status as last derived by a check."""
    return status_response(store.state, _has_token())


@app.post("/api/refresh", response_model=StatusResponse)
async def refresh():
    """Run a check now and return the resulting state."""
    await run_in_threadpool(checker.check)
    return status_response(store.state, _has_token())


@app.post("/api/start", response_model=StartResponse, status_code=202)
async def start(background_tasks: BackgroundTasks):
    """Start the codespace and launch the application in the background."""
    _schedule_start(background_tasks)
    return StartResponse(status="accepted", message="Codespace start requested")


@app.post("/start")
async def start_from_form(background_tasks: BackgroundTasks):
    """Form action behind the Start button. Always returns to the panel."""
    try:
        _schedule_start(background_tasks)
    except HTTPException as e:
        logger.warning(f"Start not scheduled: {e.detail}")
    return back_to_panel()
