"""Authentication service for YouTube OAuth and the token lifecycle."""

import secrets
import time
from dataclasses import dataclass
from datetime import timezone
from enum import Enum
from typing import Callable, Protocol

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from yt_playlist.config import settings
from yt_playlist.exceptions import (
    AuthError,
    AuthenticationRequiredError,
    ExchangeFailedError,
    RefreshFailedError,
    StateMismatchError,
)
from yt_playlist.logger import auth_logger
from yt_playlist.schemas.auth import StoredToken, YouTubeCallback
from yt_playlist.schemas.config import PlaylistConfig
from yt_playlist.services.token_store import TokenStore


class AuthProvider(Protocol):
    """OAuth2 operations the controller relies on."""

    def build_authorization_url(self, state: str) -> str: ...

    def exchange_code(self, code: str) -> StoredToken | None: ...

    def refresh(self, refresh_token: str) -> StoredToken | None: ...

    def is_expired(self, token: StoredToken) -> bool: ...


def credentials_to_token(credentials: Credentials) -> StoredToken:
    """Convert google-auth credentials into the persisted token shape."""
    if credentials.expiry is not None:
        # google-auth keeps expiry as a naive UTC datetime
        expires_at = int(credentials.expiry.replace(tzinfo=timezone.utc).timestamp())
    else:
        expires_at = int(time.time())

    return StoredToken(
        access_token=credentials.token,
        refresh_token=credentials.refresh_token,
        expires_at=expires_at,
        scope=" ".join(credentials.scopes or []),
    )


class GoogleAuthProvider:
    """AuthProvider backed by google-auth-oauthlib and google-auth."""

    def __init__(
        self,
        config: PlaylistConfig,
        scopes: list[str] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.scopes = scopes or settings.youtube_scopes
        self.clock = clock

    def get_oauth_flow(self) -> Flow:
        """
        Create a Google OAuth Flow for YouTube authentication.

        Returns:
            Configured OAuth Flow object
        """
        return Flow.from_client_config(
            {
                "web": {
                    "client_id": self.config.client_id,
                    "client_secret": self.config.client_secret,
                    "auth_uri": settings.youtube_auth_uri,
                    "token_uri": settings.youtube_token_uri,
                }
            },
            scopes=self.scopes,
            redirect_uri=self.config.redirect_url,
            # The exchange runs on a fresh Flow, so no PKCE verifier to carry over
            autogenerate_code_verifier=False,
        )

    def build_authorization_url(self, state: str) -> str:
        """
        Generate the YouTube OAuth authorization URL.

        Args:
            state: Nonce echoed back by the authorization server

        Returns:
            Authorization URL string
        """
        flow = self.get_oauth_flow()
        authorization_url, _ = flow.authorization_url(
            state=state,
            access_type="offline",
            include_granted_scopes="true",
            prompt="consent",  # Force consent to get refresh token
        )

        return authorization_url

    def exchange_code(self, code: str) -> StoredToken | None:
        """
        Exchange authorization code for an OAuth token.

        Args:
            code: Authorization code from OAuth callback

        Returns:
            The new token, or None if the server returned no access token
        """
        flow = self.get_oauth_flow()
        flow.fetch_token(code=code)

        credentials = flow.credentials
        if not credentials.token:
            return None

        return credentials_to_token(credentials)

    def refresh(self, refresh_token: str) -> StoredToken | None:
        """
        Obtain a fresh access token.

        Google does not rotate refresh tokens, so the given one is kept when
        the response carries none.
        """
        credentials = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=settings.youtube_token_uri,
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            scopes=self.scopes,
        )
        credentials.refresh(Request())

        if not credentials.token:
            return None

        token = credentials_to_token(credentials)
        if not token.refresh_token:
            token = token.model_copy(update={"refresh_token": refresh_token})
        return token

    def is_expired(self, token: StoredToken) -> bool:
        return token.is_expired_at(self.clock())


class AuthState(str, Enum):
    NO_TOKEN = "no_token"
    VALID = "valid"
    EXPIRED = "expired"
    AWAITING_REDIRECT = "awaiting_redirect"
    EXCHANGING = "exchanging"


class AuthStatus(str, Enum):
    AUTHENTICATED = "authenticated"
    REDIRECT = "redirect"


@dataclass
class AuthResult:
    """Outcome of an authentication attempt."""

    status: AuthStatus
    redirect_url: str | None = None
    state: str | None = None

    @classmethod
    def authenticated(cls) -> "AuthResult":
        return cls(status=AuthStatus.AUTHENTICATED)

    @classmethod
    def redirect(cls, url: str, state: str) -> "AuthResult":
        return cls(status=AuthStatus.REDIRECT, redirect_url=url, state=state)

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthStatus.AUTHENTICATED


@dataclass
class AuthSession:
    """In-memory auth state kept for the lifetime of a handler."""

    token: StoredToken | None = None
    state: str | None = None
    auth_state: AuthState = AuthState.NO_TOKEN


class AuthController:
    """
    Drives the authorization-code flow and keeps the token usable.

    The redirect round trip is split into two calls: the first returns an
    authorization URL and a state nonce, the second resumes with the
    callback's ``code`` and ``state``.
    """

    def __init__(
        self,
        provider: AuthProvider,
        store: TokenStore,
        session: AuthSession | None = None,
    ):
        self.provider = provider
        self.store = store
        self.session = session or AuthSession()

    @property
    def current_token(self) -> StoredToken | None:
        return self.session.token

    @property
    def state(self) -> AuthState:
        return self.session.auth_state

    def is_expired(self, token: StoredToken) -> bool:
        return self.provider.is_expired(token)

    def ensure_authenticated(
        self,
        allow_redirect: bool = False,
        callback: YouTubeCallback | None = None,
        expected_state: str | None = None,
    ) -> AuthResult:
        """
        Make sure a usable token is loaded.

        Args:
            allow_redirect: Request a redirect to Google when no token exists
            callback: ``code``/``state`` received on the OAuth redirect
            expected_state: Nonce stored by the host during the redirect phase;
                defaults to the nonce kept in this session

        Returns:
            AUTHENTICATED result, or a REDIRECT result carrying the
            authorization URL and the nonce to keep until the callback

        Raises:
            AuthError: On state mismatch, failed exchange or refresh, or when
                authorization is required but no redirect is allowed
            StorageError: If the token could not be loaded or saved
        """
        token = self.session.token
        if token is not None and not self.is_expired(token):
            self.session.auth_state = AuthState.VALID
            auth_logger.debug("Client already has a token.")
            return AuthResult.authenticated()

        stored = self.store.load()
        if stored is not None:
            auth_logger.debug("Fetching token from file.")
            token = stored

        if token is not None:
            self.session.token = token
            if not self.is_expired(token):
                self.session.auth_state = AuthState.VALID
                return AuthResult.authenticated()

            self.session.auth_state = AuthState.EXPIRED
            return self._refresh(token)

        self.session.auth_state = AuthState.NO_TOKEN

        if callback is not None and callback.code:
            auth_logger.info("No token file. Code given.")
            return self._exchange(callback, expected_state)

        if allow_redirect:
            return self._request_redirect()

        auth_logger.error("Client has to be authorized.")
        raise AuthenticationRequiredError("Client has to be authorized.")

    def _refresh(self, token: StoredToken) -> AuthResult:
        auth_logger.info("Token expired. Refreshing token.")

        if not token.refresh_token:
            auth_logger.error("Token refresh failed. No refresh token stored.")
            raise RefreshFailedError(
                "Access token expired and no refresh token is available."
            )

        try:
            refreshed = self.provider.refresh(token.refresh_token)
        except AuthError:
            raise
        except Exception as e:
            auth_logger.error(f"Token refresh failed. {e}")
            raise RefreshFailedError(f"Access token refresh failed. {e}") from e

        if refreshed is None:
            auth_logger.error("Token refresh failed.")
            raise RefreshFailedError("Access token refresh failed.")

        self.store.save(refreshed)
        self.session.token = refreshed
        self.session.auth_state = AuthState.VALID
        auth_logger.info("Token refreshed and saved.")
        return AuthResult.authenticated()

    def _exchange(
        self, callback: YouTubeCallback, expected_state: str | None
    ) -> AuthResult:
        expected = expected_state if expected_state is not None else self.session.state

        # Check if returned state matches state sent with client auth request
        if expected is None or callback.state is None or str(expected) != str(
            callback.state
        ):
            auth_logger.error("Auth failed. State mismatch.")
            raise StateMismatchError("Authentication failed. State mismatch.")

        self.session.state = None
        self.session.auth_state = AuthState.EXCHANGING

        try:
            token = self.provider.exchange_code(callback.code)
        except AuthError:
            self.session.auth_state = AuthState.NO_TOKEN
            raise
        except Exception as e:
            self.session.auth_state = AuthState.NO_TOKEN
            auth_logger.error(f"Invalid code. {e}")
            raise ExchangeFailedError(f"Invalid code given. {e}") from e

        if token is None:
            self.session.auth_state = AuthState.NO_TOKEN
            auth_logger.error("Invalid code.")
            raise ExchangeFailedError("Invalid code given.")

        self.store.save(token)
        self.session.token = token
        self.session.auth_state = AuthState.VALID
        auth_logger.info("New token acquired. Saved to file.")
        return AuthResult.authenticated()

    def _request_redirect(self) -> AuthResult:
        # Random state verifies the origin of the callback
        state = secrets.token_urlsafe(32)
        self.session.state = state

        try:
            url = self.provider.build_authorization_url(state)
        except Exception as e:
            auth_logger.error(f"Failed to build authorization URL. {e}")
            raise AuthenticationRequiredError(
                f"Failed to build authorization URL. {e}"
            ) from e

        self.session.auth_state = AuthState.AWAITING_REDIRECT
        auth_logger.info("No token. State set. Do Google auth.")
        return AuthResult.redirect(url, state)
