from pydantic import BaseModel


class Playlist(BaseModel):
    id: str
    title: str
    description: str = ""
    privacy_status: str | None = None
    item_count: int | None = None
    url: str


class PlaylistItem(BaseModel):
    id: str
    playlist_id: str
    video_id: str
    title: str
    channel_title: str = ""
    position: int | None = None
    url: str


class Video(BaseModel):
    id: str
    title: str
    description: str = ""
    channel_title: str = ""
    channel_id: str = ""
    published_at: str = ""
    duration: str | None = None
    view_count: int | None = None
    like_count: int | None = None
    comment_count: int | None = None
    url: str


class SearchResult(BaseModel):
    # id of the matched resource; with type=video searches that is always the video id
    id: str
    kind: str = "youtube#video"
    video_id: str
    title: str
    channel_title: str = ""
    description: str = ""
    url: str
