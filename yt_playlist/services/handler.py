"""Session object tying config, authorization and playlist changes together."""

from yt_playlist.config import Settings, settings
from yt_playlist.logger import app_logger, configure_logging
from yt_playlist.schemas.auth import YouTubeCallback
from yt_playlist.schemas.config import PlaylistConfig
from yt_playlist.schemas.playlist import AddOutcome, RemoveOutcome
from yt_playlist.services.auth_service import (
    AuthController,
    AuthResult,
    GoogleAuthProvider,
)
from yt_playlist.services.config_store import load_config
from yt_playlist.services.token_store import TokenStore
from yt_playlist.services.youtube_service import PlaylistMutator, YouTubePlaylistAPI


class PlaylistHandler:
    """
    Adds or removes videos on the user's YouTube playlist.

    The token is saved on first authorization and refreshed automatically
    afterwards, so user interaction is needed only once.
    """

    def __init__(
        self,
        config: PlaylistConfig,
        auth: AuthController,
        mutator: PlaylistMutator,
    ):
        self.config = config
        self.auth = auth
        self.mutator = mutator
        self.last_outcome: AddOutcome | RemoveOutcome | None = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "PlaylistHandler":
        """
        Build a handler backed by Google's OAuth and YouTube client libraries.

        Args:
            config: Application settings naming the config, token and log files

        Returns:
            Ready-to-use handler
        """
        configure_logging(config)

        playlist_config = load_config(config.config_path)
        provider = GoogleAuthProvider(playlist_config, scopes=config.youtube_scopes)
        auth = AuthController(provider, TokenStore(config.token_path))
        api = YouTubePlaylistAPI(
            playlist_config,
            token_getter=lambda: auth.current_token,
            scopes=config.youtube_scopes,
        )
        mutator = PlaylistMutator(api, auth, page_size=config.playlist_page_size)

        return cls(playlist_config, auth, mutator)

    def authenticate(
        self,
        allow_redirect: bool = False,
        callback: YouTubeCallback | None = None,
        expected_state: str | None = None,
    ) -> AuthResult:
        """Check the token, optionally asking for a redirect to Google."""
        return self.auth.ensure_authenticated(
            allow_redirect=allow_redirect,
            callback=callback,
            expected_state=expected_state,
        )

    def add_to_playlist(
        self, video_id: str, playlist_id: str | None = None
    ) -> "PlaylistHandler":
        """
        Add a video to a playlist, skipping duplicates.

        Args:
            video_id: Public video ID (from the video URL)
            playlist_id: Playlist ID; the configured default when omitted

        Returns:
            self, for method chaining
        """
        playlist_id = self.mutator.resolve_playlist_id(playlist_id, self.config)
        self.last_outcome = self.mutator.add_video(video_id, playlist_id)
        return self

    def remove_from_playlist(
        self, video_id: str, playlist_id: str | None = None
    ) -> "PlaylistHandler":
        """
        Remove a video from a playlist if it is there.

        Args:
            video_id: Public video ID (from the video URL)
            playlist_id: Playlist ID; the configured default when omitted

        Returns:
            self, for method chaining
        """
        playlist_id = self.mutator.resolve_playlist_id(playlist_id, self.config)
        self.last_outcome = self.mutator.remove_video(video_id, playlist_id)
        return self


def add(
    video_id: str,
    playlist_id: str | None = None,
    handler: PlaylistHandler | None = None,
) -> bool:
    """Add a video to a playlist. Returns False instead of raising."""
    try:
        handler = handler or PlaylistHandler.from_settings()
        handler.add_to_playlist(video_id, playlist_id)
        return True
    except Exception as e:
        app_logger.error(f"Adding video {video_id} failed: {e}")
        return False


def remove(
    video_id: str,
    playlist_id: str | None = None,
    handler: PlaylistHandler | None = None,
) -> bool:
    """Remove a video from a playlist. Returns False instead of raising."""
    try:
        handler = handler or PlaylistHandler.from_settings()
        handler.remove_from_playlist(video_id, playlist_id)
        return True
    except Exception as e:
        app_logger.error(f"Removing video {video_id} failed: {e}")
        return False
