from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaylistConfig(BaseModel):
    """OAuth client credentials and the default playlist, as read from JSON."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    client_id: str = Field(alias="clientId", min_length=1)
    client_secret: str = Field(alias="clientSecret", min_length=1)
    redirect_url: str = Field(alias="redirectUrl", min_length=1)
    default_playlist_id: str | None = Field(default=None, alias="playlistId")

    @field_validator("redirect_url")
    @classmethod
    def redirect_url_must_be_absolute(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("redirectUrl must be an absolute URL")
        return value

    @field_validator("default_playlist_id")
    @classmethod
    def blank_playlist_is_none(cls, value: str | None) -> str | None:
        return value or None
