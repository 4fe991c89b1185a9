"""Exception hierarchy for the playlist handler."""


class YTPlaylistError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(YTPlaylistError):
    """Client configuration is missing, unreadable or incomplete."""


class StorageError(YTPlaylistError):
    """The OAuth token could not be read from or written to disk."""


class AuthError(YTPlaylistError):
    """Base class for authorization failures."""


class StateMismatchError(AuthError):
    """Callback ``state`` does not match the nonce sent with the auth request."""


class AuthenticationRequiredError(AuthError):
    """No usable token and interactive authorization was not permitted."""


class RefreshFailedError(AuthError):
    """An expired token could not be refreshed."""


class ExchangeFailedError(AuthError):
    """The authorization code could not be exchanged for a token."""


class NoPlaylistIdError(YTPlaylistError):
    """Neither an explicit nor a default playlist ID is available."""


class MutationError(YTPlaylistError):
    """Base class for playlist mutation failures."""


class PlatformError(MutationError):
    """The YouTube Data API rejected or failed a request."""
