import httplib2
from google.auth.exceptions import GoogleAuthError, RefreshError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from youtube_manager.auth import get_credentials
from youtube_manager.exceptions import AuthenticationError, IntegrationError, RateLimitError
from youtube_manager.models.youtube import Playlist, PlaylistItem, SearchResult, Video

MAX_PAGE_SIZE = 50

# Failures below HTTP status level: DNS, sockets, token refresh in the middle of a request
TRANSPORT_ERRORS = (httplib2.HttpLib2Error, OSError, GoogleAuthError)
API_ERRORS = (HttpError, *TRANSPORT_ERRORS)


def _get_youtube_service():
    try:
        creds = get_credentials()
    except AuthenticationError:
        raise
    except Exception as e:
        raise AuthenticationError(
            f"Failed to obtain YouTube credentials: {e}. Run `youtube-manager auth login`."
        ) from e
    return build("youtube", "v3", credentials=creds)


def _handle_api_error(e: Exception, action: str):
    if isinstance(e, RefreshError):
        raise AuthenticationError(
            f"Error {action}: token refresh failed ({e}). Run `youtube-manager auth login`."
        ) from e
    if not isinstance(e, HttpError):
        raise IntegrationError(f"Error {action}: {e}") from e
    if e.resp.status == 429:
        raise RateLimitError("YouTube API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(
            f"Error {action}: YouTube refused the request ({e.resp.status}). "
            "Credentials may be expired, revoked or missing a scope; run `youtube-manager auth login`."
        ) from e
    if e.resp.status == 404:
        raise IntegrationError(f"Error {action}: not found") from e
    raise IntegrationError(f"Error {action}: {e}") from e


def _video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _playlist_url(playlist_id: str) -> str:
    return f"https://www.youtube.com/playlist?list={playlist_id}"


def _int_or_none(stats: dict, key: str) -> int | None:
    return int(stats[key]) if key in stats else None


def _parse_playlist(item: dict) -> Playlist:
    snippet = item.get("snippet", {})
    return Playlist(
        id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        privacy_status=item.get("status", {}).get("privacyStatus"),
        item_count=item.get("contentDetails", {}).get("itemCount"),
        url=_playlist_url(item["id"]),
    )


def _parse_playlist_item(item: dict) -> PlaylistItem:
    snippet = item.get("snippet", {})
    video_id = item.get("contentDetails", {}).get("videoId") or snippet.get("resourceId", {}).get("videoId", "")
    return PlaylistItem(
        id=item["id"],
        playlist_id=snippet.get("playlistId", ""),
        video_id=video_id,
        title=snippet.get("title", ""),
        # channelTitle is the playlist owner; the video's own channel is videoOwnerChannelTitle
        channel_title=snippet.get("videoOwnerChannelTitle") or snippet.get("channelTitle", ""),
        position=snippet.get("position"),
        url=_video_url(video_id),
    )


def paginate(list_call, limit: int | None = None, **params) -> list[dict]:
    """Call a ``list`` method page by page and concatenate the ``items``.

    Follows ``nextPageToken`` until the API stops returning one, or until
    ``limit`` items have been collected. ``limit`` of None or 0 means no cap.
    Items keep the order in which the pages were returned.
    """
    page_size = min(limit, MAX_PAGE_SIZE) if limit else MAX_PAGE_SIZE
    items: list[dict] = []
    page_token = None
    while True:
        request_params = {**params, "maxResults": page_size}
        if page_token:
            request_params["pageToken"] = page_token
        result = list_call(**request_params).execute(num_retries=3)
        items.extend(result.get("items", []))
        page_token = result.get("nextPageToken")
        if not page_token or (limit and len(items) >= limit):
            break
    return items[:limit] if limit else items


# --- Playlists ---


def list_playlists(limit: int | None = 50) -> list[Playlist]:
    """List the authenticated user's playlists."""
    service = _get_youtube_service()
    try:
        items = paginate(
            service.playlists().list,
            limit,
            part="snippet,contentDetails,status",
            mine=True,
        )
        return [_parse_playlist(item) for item in items]
    except API_ERRORS as e:
        _handle_api_error(e, "fetching playlists")


def list_playlist_items(playlist_id: str, limit: int | None = 50) -> list[PlaylistItem]:
    """List videos in a playlist, following pagination."""
    service = _get_youtube_service()
    try:
        items = paginate(
            service.playlistItems().list,
            limit,
            part="snippet,contentDetails",
            playlistId=playlist_id,
        )
        return [_parse_playlist_item(item) for item in items]
    except API_ERRORS as e:
        _handle_api_error(e, f"fetching playlist items for {playlist_id}")


def create_playlist(title: str, description: str = "", privacy: str = "private") -> Playlist:
    service = _get_youtube_service()
    body = {
        "snippet": {"title": title, "description": description},
        "status": {"privacyStatus": privacy},
    }
    try:
        result = service.playlists().insert(part="snippet,status", body=body).execute(num_retries=3)
        return _parse_playlist(result)
    except API_ERRORS as e:
        _handle_api_error(e, "creating playlist")


def delete_playlist(playlist_id: str) -> None:
    service = _get_youtube_service()
    try:
        service.playlists().delete(id=playlist_id).execute(num_retries=3)
    except API_ERRORS as e:
        _handle_api_error(e, f"deleting playlist {playlist_id}")


def add_to_playlist(playlist_id: str, video_id: str) -> PlaylistItem:
    """Append a video to the end of a playlist."""
    service = _get_youtube_service()
    body = {
        "snippet": {
            "playlistId": playlist_id,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
        },
    }
    try:
        result = service.playlistItems().insert(part="snippet", body=body).execute(num_retries=3)
        return _parse_playlist_item(result)
    except API_ERRORS as e:
        _handle_api_error(e, "adding video to playlist")


# --- Videos ---


def search_videos(query: str, limit: int = 10) -> list[SearchResult]:
    """Search YouTube for videos. Results keep the API's ranking."""
    service = _get_youtube_service()
    try:
        result = service.search().list(
            q=query,
            part="snippet",
            type="video",
            maxResults=min(limit, MAX_PAGE_SIZE),
        ).execute(num_retries=3)
        results = []
        for item in result.get("items", []):
            snippet = item.get("snippet", {})
            resource = item.get("id", {})
            video_id = resource.get("videoId", "")
            results.append(SearchResult(
                id=video_id,
                kind=resource.get("kind", "youtube#video"),
                video_id=video_id,
                title=snippet.get("title", ""),
                channel_title=snippet.get("channelTitle", ""),
                description=snippet.get("description", ""),
                url=_video_url(video_id),
            ))
        return results
    except API_ERRORS as e:
        _handle_api_error(e, "searching videos")


def get_video(video_id: str) -> Video:
    """Get detailed information about a video."""
    service = _get_youtube_service()
    try:
        result = service.videos().list(
            id=video_id,
            part="snippet,contentDetails,statistics",
        ).execute(num_retries=3)
    except API_ERRORS as e:
        _handle_api_error(e, f"fetching video {video_id}")
    items = result.get("items", [])
    if not items:
        raise IntegrationError(f"Video not found: {video_id}")
    item = items[0]
    snippet = item.get("snippet", {})
    stats = item.get("statistics", {})
    return Video(
        id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=snippet.get("channelId", ""),
        published_at=snippet.get("publishedAt", ""),
        duration=item.get("contentDetails", {}).get("duration"),
        view_count=_int_or_none(stats, "viewCount"),
        like_count=_int_or_none(stats, "likeCount"),
        comment_count=_int_or_none(stats, "commentCount"),
        url=_video_url(item["id"]),
    )
