"""Playlists router for adding and removing videos."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from yt_playlist.dependencies import get_handler
from yt_playlist.exceptions import (
    AuthError,
    NoPlaylistIdError,
    PlatformError,
    YTPlaylistError,
)
from yt_playlist.logger import api_logger
from yt_playlist.schemas.playlist import AddVideoRequest, PlaylistMutationResponse
from yt_playlist.services.handler import PlaylistHandler

router = APIRouter(prefix="/playlists")


def _to_http_error(e: YTPlaylistError) -> HTTPException:
    if isinstance(e, NoPlaylistIdError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(e, AuthError):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(e, PlatformError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return HTTPException(status_code=code, detail=str(e))


@router.post("/items", response_model=PlaylistMutationResponse)
def add_playlist_item(
    body: AddVideoRequest,
    handler: Annotated[PlaylistHandler, Depends(get_handler)],
):
    """
    Add a video to a playlist.

    Videos already in the playlist are not added again; the playlist from
    the config file is used when none is given.
    """
    try:
        playlist_id = handler.mutator.resolve_playlist_id(
            body.playlist_id, handler.config
        )
        handler.add_to_playlist(body.video_id, playlist_id)
    except YTPlaylistError as e:
        api_logger.error(f"Failed to add video {body.video_id}: {e}")
        raise _to_http_error(e)

    return PlaylistMutationResponse(
        video_id=body.video_id,
        playlist_id=playlist_id,
        outcome=handler.last_outcome.value,
    )


@router.delete("/items/{video_id}", response_model=PlaylistMutationResponse)
def remove_playlist_item(
    video_id: str,
    handler: Annotated[PlaylistHandler, Depends(get_handler)],
    playlist_id: Annotated[str | None, Query()] = None,
):
    """
    Remove a video from a playlist.

    Nothing is deleted when the video is not in the playlist.
    """
    try:
        playlist_id = handler.mutator.resolve_playlist_id(playlist_id, handler.config)
        handler.remove_from_playlist(video_id, playlist_id)
    except YTPlaylistError as e:
        api_logger.error(f"Failed to remove video {video_id}: {e}")
        raise _to_http_error(e)

    return PlaylistMutationResponse(
        video_id=video_id,
        playlist_id=playlist_id,
        outcome=handler.last_outcome.value,
    )
