"""GitHub Codespaces API client."""

import logging
from typing import Any, Dict, List, Optional

import requests

from . import config
from .errors import GitHubAPIError, HealthCheckError
from .models import Codespace, ConsoleCommand

logger = logging.getLogger(__name__)


class CodespacesClient:
    """HTTP client for the subset of the Codespaces API the panel uses."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub token sent as a bearer credential
            base_url: API root (default: GITHUB_API_URL)
            timeout: Per-request timeout in seconds (default: HTTP_TIMEOUT)
            session: Session to reuse (default: a new one)
        """
        self.base_url = (base_url or config.GITHUB_API_URL).rstrip("/")
        self.timeout = config.HTTP_TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": config.GITHUB_ACCEPT,
            "User-Agent": config.USER_AGENT,
        }

    def close(self) -> None:
        """Close the underlying session and its connection pool."""
        self.session.close()

    def __enter__(self) -> "CodespacesClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method (GET, POST)
            path: API path
            data: JSON body (for POST)

        Returns:
            The successful response

        Raises:
            GitHubAPIError: If the request fails or returns a non-success status
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                headers=self._headers,
                json=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GitHubAPIError(f"Could not connect to GitHub: {e}")

        if not resp.ok:
            raise GitHubAPIError(
                f"GitHub API error ({resp.status_code}) for {method} {path}: {resp.text}",
                status_code=resp.status_code,
            )
        return resp

    def list_codespaces(self) -> List[Codespace]:
        """List the authenticated user's codespaces.

        Raises:
            GitHubAPIError: If listing fails
        """
        payload = self._request("GET", "/user/codespaces").json()
        # The API wraps the list; accept a bare list as well.
        if isinstance(payload, dict):
            payload = payload.get("codespaces", [])
        return [Codespace.model_validate(item) for item in payload]

    def start_codespace(self, codespace_id: str) -> None:
        """Ask GitHub to start a codespace.

        Raises:
            GitHubAPIError: If the start request is rejected
        """
        self._request("POST", f"/user/codespaces/{codespace_id}/start")

    def run_console_command(self, codespace_id: str, command: str, tty: bool = True) -> None:
        """Run a command in the codespace's console.

        Raises:
            GitHubAPIError: If the command could not be sent
        """
        body = ConsoleCommand(command=command, tty=tty)
        self._request(
            "POST",
            f"/user/codespaces/{codespace_id}/console",
            data=body.model_dump(),
        )

    def probe_health(self, app_url: str) -> None:
        """Check that the application at app_url answers its health endpoint.

        No credential is sent to the application.

        Raises:
            HealthCheckError: On a non-ok response or a network fault
        """
        url = f"{app_url}{config.APP_HEALTH_PATH}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise HealthCheckError(f"Health check error at {url}: {e}")
        if not resp.ok:
            raise HealthCheckError(f"Health check failed at {url} ({resp.status_code}): {resp.text}")
