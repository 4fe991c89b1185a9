from yt_playlist.services.auth_service import (
    AuthController,
    AuthResult,
    AuthSession,
    AuthState,
    AuthStatus,
    GoogleAuthProvider,
)
from yt_playlist.services.config_store import load_config
from yt_playlist.services.handler import PlaylistHandler, add, remove
from yt_playlist.services.token_store import TokenStore
from yt_playlist.services.youtube_service import PlaylistMutator, YouTubePlaylistAPI

__all__ = [
    "AuthController",
    "AuthResult",
    "AuthSession",
    "AuthState",
    "AuthStatus",
    "GoogleAuthProvider",
    "load_config",
    "PlaylistHandler",
    "add",
    "remove",
    "TokenStore",
    "PlaylistMutator",
    "YouTubePlaylistAPI",
]
