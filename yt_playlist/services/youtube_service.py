"""YouTube API service for reading and changing playlist contents."""

from typing import Any, Callable, Iterator, List, Protocol

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from yt_playlist.config import settings
from yt_playlist.exceptions import NoPlaylistIdError, PlatformError
from yt_playlist.logger import api_logger
from yt_playlist.schemas.auth import StoredToken
from yt_playlist.schemas.config import PlaylistConfig
from yt_playlist.schemas.playlist import (
    AddOutcome,
    PlaylistItem,
    PlaylistItemDeleteRequest,
    PlaylistItemInsertRequest,
    RemoveOutcome,
)
from yt_playlist.services.auth_service import AuthController


class PlaylistAPI(Protocol):
    """The ``playlistItems`` operations the mutator relies on."""

    def list_items(
        self, playlist_id: str, page_token: str | None = None, max_results: int = 25
    ) -> tuple[List[PlaylistItem], str | None]: ...

    def insert_item(self, request: PlaylistItemInsertRequest) -> Any: ...

    def delete_item(self, request: PlaylistItemDeleteRequest) -> Any: ...


class YouTubePlaylistAPI:
    """PlaylistAPI backed by the YouTube Data API v3 client."""

    def __init__(
        self,
        config: PlaylistConfig,
        token_getter: Callable[[], StoredToken | None],
        scopes: list[str] | None = None,
    ):
        self.config = config
        self.token_getter = token_getter
        self.scopes = scopes or settings.youtube_scopes
        self._youtube = None
        self._access_token: str | None = None

    @property
    def youtube(self):
        """YouTube API client for the current access token, rebuilt after refreshes."""
        token = self.token_getter()
        if token is None:
            raise PlatformError("No OAuth token available for the YouTube API.")

        if self._youtube is None or self._access_token != token.access_token:
            # Access token only: refreshing stays with AuthController, which persists it
            creds = Credentials(token=token.access_token)
            self._youtube = build("youtube", "v3", credentials=creds)
            self._access_token = token.access_token

        return self._youtube

    def list_items(
        self, playlist_id: str, page_token: str | None = None, max_results: int = 25
    ) -> tuple[List[PlaylistItem], str | None]:
        """
        Fetch a single page of playlist items.

        Args:
            playlist_id: YouTube playlist ID
            page_token: Token for the next page (None for first page)
            max_results: Page size

        Returns:
            Tuple of (list of PlaylistItem objects, next page token or None)
        """
        try:
            request = self.youtube.playlistItems().list(
                part="snippet,contentDetails",
                playlistId=playlist_id,
                maxResults=max_results,
                pageToken=page_token,
            )
            response = request.execute()
        except (HttpError, GoogleAuthError) as e:
            raise PlatformError(f"Service error: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise PlatformError(f"Client error: {e}") from e

        items = [PlaylistItem.from_api(item) for item in response.get("items", [])]
        return items, response.get("nextPageToken")

    def insert_item(self, request: PlaylistItemInsertRequest) -> Any:
        try:
            return (
                self.youtube.playlistItems()
                .insert(part="snippet", body=request.to_body())
                .execute()
            )
        except (HttpError, GoogleAuthError) as e:
            raise PlatformError(f"Service error: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise PlatformError(f"Client error: {e}") from e

    def delete_item(self, request: PlaylistItemDeleteRequest) -> Any:
        try:
            return self.youtube.playlistItems().delete(id=request.item_id).execute()
        except (HttpError, GoogleAuthError) as e:
            raise PlatformError(f"Service error: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise PlatformError(f"Client error: {e}") from e


class PlaylistMutator:
    """Idempotent add/remove of videos on a playlist."""

    def __init__(self, api: PlaylistAPI, auth: AuthController, page_size: int = 25):
        self.api = api
        self.auth = auth
        self.page_size = page_size

    @staticmethod
    def resolve_playlist_id(explicit: str | None, config: PlaylistConfig) -> str:
        """Return the explicit playlist ID, else the configured default."""
        if explicit:
            return explicit
        if config.default_playlist_id:
            return config.default_playlist_id
        raise NoPlaylistIdError("No playlist ID given.")

    def list_all_items(self, playlist_id: str) -> Iterator[PlaylistItem]:
        """
        Yield every item of a playlist, following page tokens until exhausted.

        Args:
            playlist_id: YouTube playlist ID

        Yields:
            PlaylistItem objects in playlist order
        """
        page_token = None

        while True:
            items, page_token = self.api.list_items(
                playlist_id, page_token=page_token, max_results=self.page_size
            )
            yield from items

            if not page_token:
                break

    def add_video(self, video_id: str, playlist_id: str) -> AddOutcome:
        """
        Append a video unless the playlist already contains it.

        Returns:
            INSERTED, or ALREADY_PRESENT when no request was sent
        """
        self.auth.ensure_authenticated(allow_redirect=False)

        try:
            api_logger.info(f'Adding video "{video_id}" to playlist {playlist_id}')
            snapshot = list(self.list_all_items(playlist_id))

            if any(item.video_id == video_id for item in snapshot):
                api_logger.info(f'Duplicate video "{video_id}".')
                return AddOutcome.ALREADY_PRESENT

            self.api.insert_item(
                PlaylistItemInsertRequest(playlist_id=playlist_id, video_id=video_id)
            )
            api_logger.info(f'Video "{video_id}" added.')
            return AddOutcome.INSERTED

        except PlatformError as e:
            api_logger.error(f"Failed to add video {video_id} to playlist {playlist_id}: {e}")
            raise

    def remove_video(self, video_id: str, playlist_id: str) -> RemoveOutcome:
        """
        Remove a video from a playlist if it is there.

        When the playlist holds the video more than once, the last matching
        entry in playlist order is deleted and the others are left in place.

        Returns:
            REMOVED, or NOT_PRESENT when no request was sent
        """
        self.auth.ensure_authenticated(allow_redirect=False)

        try:
            api_logger.info(f'Removing video "{video_id}" from playlist {playlist_id}')

            match = None
            for item in self.list_all_items(playlist_id):
                if item.video_id == video_id:
                    match = item

            if match is None:
                api_logger.info(f'Video "{video_id}" not in playlist.')
                return RemoveOutcome.NOT_PRESENT

            self.api.delete_item(PlaylistItemDeleteRequest(item_id=match.item_id))
            api_logger.info(f'Video "{video_id}" removed.')
            return RemoveOutcome.REMOVED

        except PlatformError as e:
            api_logger.error(
                f"Failed to remove video {video_id} from playlist {playlist_id}: {e}"
            )
            raise
