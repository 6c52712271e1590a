"""Request and response models."""

from typing import Optional
from pydantic import BaseModel, field_validator


class Repository(BaseModel):
    """Repository a codespace was created from."""
    name: str
    full_name: Optional[str] = None


class Codespace(BaseModel):
    """A codespace record as returned by the GitHub API.

    Only the fields the panel reads are declared; the rest are ignored.
    """
    id: str
    name: str
    state: str
    repository: Repository

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        # GitHub returns a numeric id.
        return str(value)


class ConsoleCommand(BaseModel):
    """Body of a console command request."""
    command: str
    tty: bool = True


class CheckResult(BaseModel):
    """Outcome of a single status check."""
    status: str
    url: str = ""
    codespace_id: Optional[str] = None


class StatusResponse(BaseModel):
    """Current panel state plus how it should be displayed."""
    status: str
    color: str
    message: str
    url: str
    codespace_id: Optional[str] = None
    starting: bool
    loading: bool
    has_token: bool
    checked_at: Optional[str] = None


class StartResponse(BaseModel):
    """Response from the start endpoint."""
    status: str
    message: str
