"""Console rendering of YouTube resources."""

import json
from collections.abc import Sequence

from pydantic import BaseModel

from youtube_manager.models.youtube import Playlist, PlaylistItem, SearchResult, Video

SEARCH_DESCRIPTION_LIMIT = 100
VIDEO_DESCRIPTION_LIMIT = 500


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_playlists(playlists: Sequence[Playlist]) -> str:
    if not playlists:
        return "No playlists found."
    lines = []
    for playlist in playlists:
        lines += [
            f"📁 {playlist.title}",
            f"   ID: {playlist.id}",
            f"   Videos: {playlist.item_count or 0}",
            f"   Link: {playlist.url}",
            "",
        ]
    return "\n".join(lines)


def format_playlist_items(items: Sequence[PlaylistItem]) -> str:
    if not items:
        return "No videos found in this playlist."
    lines = []
    for idx, item in enumerate(items, start=1):
        lines += [
            f"{idx}. {item.title}",
            f"   Video ID: {item.video_id}",
            f"   Channel: {item.channel_title}",
            f"   Link: {item.url}",
            "",
        ]
    return "\n".join(lines)


def format_search_results(results: Sequence[SearchResult]) -> str:
    if not results:
        return "No videos found."
    lines = []
    for idx, result in enumerate(results, start=1):
        lines += [
            f"{idx}. {result.title}",
            f"   Video ID: {result.video_id}",
            f"   Channel: {result.channel_title}",
            f"   Description: {truncate(result.description, SEARCH_DESCRIPTION_LIMIT)}",
            f"   Link: {result.url}",
            "",
        ]
    return "\n".join(lines)


def format_video(video: Video) -> str:
    lines = [
        f"📹 {video.title}",
        f"   Video ID: {video.id}",
        f"   Channel: {video.channel_title}",
        f"   Published: {video.published_at}",
        f"   Duration: {video.duration or ''}",
        f"   Views: {video.view_count or 0}",
        f"   Likes: {video.like_count or 0}",
    ]
    if video.comment_count:
        lines.append(f"   Comments: {video.comment_count}")
    lines += [
        f"   Link: {video.url}",
        "",
        "   Description:",
        f"   {truncate(video.description, VIDEO_DESCRIPTION_LIMIT)}",
    ]
    return "\n".join(lines)


def format_json(data: BaseModel | Sequence[BaseModel]) -> str:
    if isinstance(data, BaseModel):
        return data.model_dump_json(indent=2)
    return json.dumps([item.model_dump(mode="json") for item in data], indent=2, ensure_ascii=False)
