from yt_playlist.schemas.auth import (
    AuthMessage,
    AuthStatusResponse,
    StoredToken,
    YouTubeCallback,
)
from yt_playlist.schemas.config import PlaylistConfig
from yt_playlist.schemas.playlist import (
    AddOutcome,
    AddVideoRequest,
    PlaylistItem,
    PlaylistItemDeleteRequest,
    PlaylistItemInsertRequest,
    PlaylistMutationResponse,
    RemoveOutcome,
)

__all__ = [
    "AuthMessage",
    "AuthStatusResponse",
    "StoredToken",
    "YouTubeCallback",
    "PlaylistConfig",
    "AddOutcome",
    "AddVideoRequest",
    "PlaylistItem",
    "PlaylistItemDeleteRequest",
    "PlaylistItemInsertRequest",
    "PlaylistMutationResponse",
    "RemoveOutcome",
]
