"""FastAPI dependencies."""

from functools import lru_cache

from fastapi import HTTPException, status

from yt_playlist.config import settings
from yt_playlist.exceptions import ConfigError
from yt_playlist.services.handler import PlaylistHandler


@lru_cache
def _build_handler() -> PlaylistHandler:
    return PlaylistHandler.from_settings(settings)


def get_handler() -> PlaylistHandler:
    """One handler per process, so the OAuth state nonce survives the redirect."""
    try:
        return _build_handler()
    except ConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
