"""Custom exceptions for the codespace panel."""

from typing import Optional


class PanelError(Exception):
    """Base exception for all panel errors."""
    pass


class GitHubAPIError(PanelError):
    """GitHub API returned a non-success response or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HealthCheckError(PanelError):
    """The application inside the codespace did not answer its health check."""
    pass


class StartError(PanelError):
    """Starting the codespace failed or timed out."""
    pass
