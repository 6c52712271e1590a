"""Starter - starts the codespace and launches the application in it."""

import logging
import time
from typing import Callable, Optional

from . import config
from .checker import StatusChecker
from .errors import GitHubAPIError, PanelError, StartError
from .github import CodespacesClient
from .state import StateStore, store
from .status import Status

logger = logging.getLogger(__name__)

# Statuses that prove the codespace itself is up.
_CODESPACE_UP = frozenset({Status.RUNNING.value, Status.APP_NOT_RUNNING.value})


class Starter:
    """Starts the recorded codespace and waits for the application.

    The starting flag is held for the whole operation and always released.
    """

    def __init__(
        self,
        checker: StatusChecker,
        state_store: Optional[StateStore] = None,
        client_factory: Callable[[str], CodespacesClient] = CodespacesClient,
        sleep: Callable[[float], None] = time.sleep,
        attempts: Optional[int] = None,
        interval: Optional[float] = None,
        command: Optional[str] = None,
    ):
        self.checker = checker
        self.store = state_store or store
        self.client_factory = client_factory
        self.sleep = sleep
        self.attempts = config.START_ATTEMPTS if attempts is None else attempts
        self.interval = config.START_INTERVAL if interval is None else interval
        self.command = command or config.APP_COMMAND

    def start(self) -> bool:
        """Start the codespace and launch the application.

        Returns:
            True once the application is confirmed running, False otherwise
        """
        codespace_id = self.store.state.codespace_id
        token = config.github_token()
        if not codespace_id or not token:
            logger.error("No codespace ID or GitHub token available")
            self.store.set_status(Status.ERROR.value)
            return False

        if not self.store.try_begin_start():
            logger.warning("Start already in progress")
            return False

        return self.run_claimed()

    def run_claimed(self) -> bool:
        """Run a start whose starting flag the caller already holds.

        The flag is released on every exit path.
        """
        try:
            codespace_id = self.store.state.codespace_id
            token = config.github_token()
            if not codespace_id or not token:
                raise StartError("No codespace ID or GitHub token available")
            with self.client_factory(token) as client:
                self._run(client, codespace_id)
            return True
        except PanelError as e:
            logger.error(f"Error starting codespace: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error starting codespace: {e}")
        finally:
            self.store.end_start()

        self.store.set_status(Status.ERROR.value)
        return False

    def _run(self, client: CodespacesClient, codespace_id: str) -> None:
        logger.info(f"Starting codespace {codespace_id}")
        try:
            client.start_codespace(codespace_id)
        except GitHubAPIError as e:
            raise StartError(f"Failed to start codespace: {e}")
        logger.info("Codespace start command sent")

        launched = False
        for attempt in range(1, self.attempts + 1):
            logger.info(f"Checking codespace status (attempt {attempt}/{self.attempts})")
            self.sleep(self.interval)
            result = self.checker.check()

            if result.status in _CODESPACE_UP and not launched:
                self._launch_app(client, codespace_id)
                launched = True
            if result.status == Status.RUNNING.value:
                logger.info("Application is running")
                return

        raise StartError(f"Timeout waiting for codespace to start after {self.attempts} attempts")

    def _launch_app(self, client: CodespacesClient, codespace_id: str) -> None:
        """Send the launch command. Failure is logged, never raised."""
        logger.info(f"Launching application: {self.command}")
        try:
            client.run_console_command(codespace_id, self.command, tty=True)
        except GitHubAPIError as e:
            logger.error(f"Failed to launch application: {e}")
            return
        logger.info("Application launch command sent")
