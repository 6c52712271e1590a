"""Configuration loading for the codespace panel."""

import os
from typing import Optional

from . import __version__


GITHUB_API_URL = os.environ.get("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_ACCEPT = "application/vnd.github.v3+json"
USER_AGENT = os.environ.get("PANEL_USER_AGENT", "codespace-panel")

REPO_NAME = os.environ.get("REPO_NAME", "Fake-Text-Story")
APP_PORT = int(os.environ.get("APP_PORT", "8080"))
APP_DOMAIN = os.environ.get("APP_DOMAIN", "app.github.dev")
APP_HEALTH_PATH = os.environ.get("APP_HEALTH_PATH", "/health")
APP_COMMAND = os.environ.get("APP_COMMAND", "python app.py")

POLL_INTERVAL = float(os.environ.get("POLL_INTERVAL", "30"))
START_ATTEMPTS = int(os.environ.get("START_ATTEMPTS", "30"))
START_INTERVAL = float(os.environ.get("START_INTERVAL", "2"))
HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "10"))

PANEL_TITLE = os.environ.get("PANEL_TITLE", "Fake Text Story Control Panel")
PANEL_VERSION = __version__

# Checked in order. NEXT_PUBLIC_GITHUB_TOKEN is accepted for existing deployments.
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "NEXT_PUBLIC_GITHUB_TOKEN")


def github_token() -> Optional[str]:
    """Return the GitHub token from the environment, or None if unset.

    Read on every call so that a token added to the environment is picked up
    without restarting the panel.
    """
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def app_url(codespace_name: str) -> str:
    """Forwarded-port URL of the application hosted in a codespace."""
    return f"https://{codespace_name}-{APP_PORT}.{APP_DOMAIN}"
