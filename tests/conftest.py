from pathlib import Path
from typing import List

import pytest

from yt_playlist.exceptions import PlatformError
from yt_playlist.schemas.auth import StoredToken
from yt_playlist.schemas.config import PlaylistConfig
from yt_playlist.schemas.playlist import (
    PlaylistItem,
    PlaylistItemDeleteRequest,
    PlaylistItemInsertRequest,
)
from yt_playlist.services.auth_service import AuthController
from yt_playlist.services.handler import PlaylistHandler
from yt_playlist.services.token_store import TokenStore
from yt_playlist.services.youtube_service import PlaylistMutator

NOW = 1_700_000_000


class FakeClock:
    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeAuthProvider:
    """Records every call; results can be swapped per test."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.states: List[str] = []
        self.exchanged: List[str] = []
        self.refreshed: List[str] = []
        self.exchange_result = StoredToken(
            access_token="exchanged",
            refresh_token="refresh-1",
            expires_at=int(clock()) + 3600,
            scope="https://www.googleapis.com/auth/youtube",
        )
        self.refresh_result = StoredToken(
            access_token="refreshed",
            refresh_token="refresh-1",
            expires_at=int(clock()) + 3600,
            scope="https://www.googleapis.com/auth/youtube",
        )

    def build_authorization_url(self, state: str) -> str:
        self.states.append(state)
        return f"https://accounts.example.com/auth?state={state}"

    def exchange_code(self, code: str):
        self.exchanged.append(code)
        if isinstance(self.exchange_result, Exception):
            raise self.exchange_result
        return self.exchange_result

    def refresh(self, refresh_token: str):
        self.refreshed.append(refresh_token)
        if isinstance(self.refresh_result, Exception):
            raise self.refresh_result
        return self.refresh_result

    def is_expired(self, token: StoredToken) -> bool:
        return token.is_expired_at(self.clock())


class FakePlaylistAPI:
    """In-memory playlist paged by offset; page tokens are the next offset."""

    def __init__(self, items: List[PlaylistItem] | None = None) -> None:
        self.items: List[PlaylistItem] = list(items or [])
        self.list_calls: List[tuple] = []
        self.inserts: List[PlaylistItemInsertRequest] = []
        self.deletes: List[PlaylistItemDeleteRequest] = []
        self.fail_with: str | None = None
        self._next_id = 0

    def list_items(self, playlist_id, page_token=None, max_results=25):
        self.list_calls.append((playlist_id, page_token, max_results))
        if self.fail_with:
            raise PlatformError(self.fail_with)

        start = int(page_token or 0)
        end = start + max_results
        next_token = str(end) if end < len(self.items) else None
        return self.items[start:end], next_token

    def insert_item(self, request: PlaylistItemInsertRequest):
        if self.fail_with:
            raise PlatformError(self.fail_with)

        self.inserts.append(request)
        self._next_id += 1
        self.items.append(
            PlaylistItem(
                item_id=f"new-{self._next_id}",
                video_id=request.video_id,
                position=len(self.items),
            )
        )
        return {"id": f"new-{self._next_id}"}

    def delete_item(self, request: PlaylistItemDeleteRequest):
        if self.fail_with:
            raise PlatformError(self.fail_with)

        self.deletes.append(request)
        self.items = [item for item in self.items if item.item_id != request.item_id]


def make_items(count: int, prefix: str = "video") -> List[PlaylistItem]:
    return [
        PlaylistItem(item_id=f"item-{i}", video_id=f"{prefix}-{i}", position=i)
        for i in range(count)
    ]


def valid_token(expires_at: int = NOW + 3600) -> StoredToken:
    return StoredToken(
        access_token="access",
        refresh_token="refresh-1",
        expires_at=expires_at,
        scope="https://www.googleapis.com/auth/youtube",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> PlaylistConfig:
    return PlaylistConfig(
        clientId="client-id",
        clientSecret="client-secret",
        redirectUrl="http://localhost:8000/api/v1/auth/youtube",
        playlistId="PL-default",
    )


@pytest.fixture
def token_store(tmp_path: Path) -> TokenStore:
    return TokenStore(tmp_path / "yph_token.json")


@pytest.fixture
def provider(clock: FakeClock) -> FakeAuthProvider:
    return FakeAuthProvider(clock)


@pytest.fixture
def auth(provider: FakeAuthProvider, token_store: TokenStore):
    return AuthController(provider, token_store)


@pytest.fixture
def api() -> FakePlaylistAPI:
    return FakePlaylistAPI()


@pytest.fixture
def mutator(api: FakePlaylistAPI, auth: AuthController) -> PlaylistMutator:
    return PlaylistMutator(api, auth)


@pytest.fixture
def handler(config, auth, mutator) -> PlaylistHandler:
    return PlaylistHandler(config, auth, mutator)


@pytest.fixture
def authenticated(token_store: TokenStore) -> StoredToken:
    token = valid_token()
    token_store.save(token)
    return token
