from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel


class PlaylistItem(BaseModel):
    """A playlist entry: the join record between a playlist and a video."""

    item_id: str
    video_id: str
    position: int | None = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "PlaylistItem":
        """Build from a ``playlistItems`` resource returned by the Data API."""
        snippet = item.get("snippet", {})
        content_details = item.get("contentDetails", {})
        video_id = content_details.get("videoId") or snippet.get(
            "resourceId", {}
        ).get("videoId", "")

        return cls(
            item_id=item["id"],
            video_id=video_id,
            position=snippet.get("position"),
        )


class PlaylistItemInsertRequest(BaseModel):
    """Append a video to a playlist; position is left to the platform."""

    playlist_id: str
    video_id: str

    def to_body(self) -> Dict[str, Any]:
        return {
            "snippet": {
                "playlistId": self.playlist_id,
                "resourceId": {"kind": "youtube#video", "videoId": self.video_id},
            }
        }


class PlaylistItemDeleteRequest(BaseModel):
    """Delete a single playlist item by its own identifier."""

    item_id: str


class AddOutcome(str, Enum):
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"


class RemoveOutcome(str, Enum):
    REMOVED = "removed"
    NOT_PRESENT = "not_present"


class AddVideoRequest(BaseModel):
    """Request body for adding a video to a playlist."""

    video_id: str
    playlist_id: str | None = None  # falls back to the configured playlist


class PlaylistMutationResponse(BaseModel):
    """Result of an add or remove call."""

    video_id: str
    playlist_id: str
    outcome: str
