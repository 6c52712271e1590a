"""Status checker - derives the panel status from the Codespaces API."""

import logging
from typing import Callable, Optional

from . import config
from .errors import GitHubAPIError, HealthCheckError
from .github import CodespacesClient
from .models import CheckResult, Codespace
from .state import StateStore, store
from .status import Status, is_running_state

logger = logging.getLogger(__name__)


def find_codespace(codespaces: list[Codespace], repo_name: str) -> Optional[Codespace]:
    """Return the first codespace created from repo_name, or None."""
    for codespace in codespaces:
        if codespace.repository.name == repo_name:
            return codespace
    return None


class StatusChecker:
    """Checks the target codespace and its application, then commits the result."""

    def __init__(
        self,
        state_store: Optional[StateStore] = None,
        client_factory: Callable[[str], CodespacesClient] = CodespacesClient,
        repo_name: Optional[str] = None,
    ):
        self.store = state_store or store
        self.client_factory = client_factory
        self.repo_name = repo_name or config.REPO_NAME

    def check(self) -> CheckResult:
        """Run one check and commit it unless a newer check has been issued.

        Never raises; every failure becomes a status.
        """
        generation = self.store.begin_check()
        try:
            result = self._derive()
        except Exception as e:
            logger.exception(f"Error checking status: {e}")
            result = CheckResult(status=Status.ERROR.value)
        self.store.commit_check(generation, result)
        return result

    def _derive(self) -> CheckResult:
        token = config.github_token()
        if not token:
            logger.warning("No GitHub token found")
            return CheckResult(status=Status.NO_TOKEN.value)

        with self.client_factory(token) as client:
            return self._check_codespace(client)

    def _check_codespace(self, client: CodespacesClient) -> CheckResult:
        logger.info("Fetching codespaces...")
        try:
            codespaces = client.list_codespaces()
        except GitHubAPIError as e:
            logger.error(str(e))
            return CheckResult(status=Status.ERROR.value)
        logger.info(f"Found {len(codespaces)} codespaces")

        codespace = find_codespace(codespaces, self.repo_name)
        if codespace is None:
            logger.info(f"No codespace found for repo: {self.repo_name}")
            return CheckResult(status=Status.NOT_FOUND.value)

        logger.info(f"Found codespace {codespace.name} (state: {codespace.state})")

        if not is_running_state(codespace.state):
            # Lifecycle states that are not running pass through verbatim.
            return CheckResult(status=codespace.state, codespace_id=codespace.id)

        url = config.app_url(codespace.name)
        logger.info(f"Checking health at {url}")
        try:
            client.probe_health(url)
        except HealthCheckError as e:
            logger.warning(str(e))
            return CheckResult(
                status=Status.APP_NOT_RUNNING.value,
                url=url,
                codespace_id=codespace.id,
            )

        logger.info("Health check passed")
        return CheckResult(status=Status.RUNNING.value, url=url, codespace_id=codespace.id)
