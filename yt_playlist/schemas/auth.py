from pydantic import BaseModel


class StoredToken(BaseModel):
    """OAuth token persisted between runs."""

    access_token: str
    refresh_token: str | None = None
    expires_at: int  # epoch seconds
    scope: str = ""

    def is_expired_at(self, now: float) -> bool:
        """A token expiring exactly at ``now`` counts as expired."""
        return self.expires_at <= now


class YouTubeCallback(BaseModel):
    """YouTube OAuth callback data."""

    code: str | None = None
    state: str | None = None


class AuthStatusResponse(BaseModel):
    """Whether a usable token is available."""

    authenticated: bool
    reason: str | None = None
    expires_at: int | None = None


class AuthMessage(BaseModel):
    """Outcome of the redirect-based auth entry point."""

    status: str
    message: str
