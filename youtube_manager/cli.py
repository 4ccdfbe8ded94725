import logging
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Annotated

import typer
from pydantic import ValidationError

from youtube_manager import auth
from youtube_manager.config import get_settings
from youtube_manager.exceptions import YouTubeManagerError
from youtube_manager.formatting import (
    format_json,
    format_playlist_items,
    format_playlists,
    format_search_results,
    format_video,
)
from youtube_manager.services import download as download_service
from youtube_manager.services import youtube as youtube_service

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="youtube-manager",
    help="YouTube Manager - Download videos and manage playlists (YouTube Data API v3 and yt-dlp).",
    no_args_is_help=True,
)

auth_app = typer.Typer(help="Manage the cached OAuth token.", no_args_is_help=True)
app.add_typer(auth_app, name="auth")


class Privacy(str, Enum):
    private = "private"
    public = "public"
    unlisted = "unlisted"


JsonOption = Annotated[bool, typer.Option("--json", help="Print raw JSON instead of text.")]


@contextmanager
def _reporting_errors():
    """Turn a tool error into a message on stderr and exit status 1."""
    try:
        yield
    except YouTubeManagerError as e:
        logger.error("Command execution failed: %s", e)
        logger.debug("Traceback", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def _status(message: str) -> None:
    typer.echo(message, err=True)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=1) from e
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# --- Playlists ---


@app.command("list-playlists")
def list_playlists(
    limit: Annotated[int, typer.Option(min=0, help="Maximum number of playlists to return (0 for all).")] = 50,
    json_output: JsonOption = False,
) -> None:
    """List your YouTube playlists."""
    with _reporting_errors():
        _status("📋 Fetching playlists...\n")
        playlists = youtube_service.list_playlists(limit)
    if json_output:
        typer.echo(format_json(playlists))
        return
    if playlists:
        _status(f"✅ Found {len(playlists)} playlist(s):\n")
    typer.echo(format_playlists(playlists))


@app.command("get-playlist")
def get_playlist(
    playlist_id: Annotated[str, typer.Argument(help="Playlist ID.")],
    limit: Annotated[int, typer.Option(min=0, help="Maximum number of videos to return (0 for all).")] = 50,
    json_output: JsonOption = False,
) -> None:
    """Get videos from a playlist."""
    with _reporting_errors():
        _status(f"🔍 Fetching videos from playlist: {playlist_id}...\n")
        items = youtube_service.list_playlist_items(playlist_id, limit)
    if json_output:
        typer.echo(format_json(items))
        return
    if items:
        _status(f"✅ Found {len(items)} video(s):\n")
    typer.echo(format_playlist_items(items))


@app.command("create-playlist")
def create_playlist(
    title: Annotated[str, typer.Argument(help="Playlist title.")],
    description: Annotated[str, typer.Option(help="Playlist description.")] = "",
    privacy: Annotated[Privacy, typer.Option(help="Privacy status.")] = Privacy.private,
) -> None:
    """Create a new playlist."""
    with _reporting_errors():
        _status(f"📝 Creating playlist: {title}...\n")
        playlist = youtube_service.create_playlist(title, description, privacy.value)
    _status("✅ Playlist created successfully!")
    typer.echo(f"   ID: {playlist.id}")
    typer.echo(f"   Link: {playlist.url}")


@app.command("delete-playlist")
def delete_playlist(playlist_id: Annotated[str, typer.Argument(help="Playlist ID.")]) -> None:
    """Delete a playlist."""
    with _reporting_errors():
        _status(f"🗑️  Deleting playlist: {playlist_id}...\n")
        youtube_service.delete_playlist(playlist_id)
    _status("✅ Playlist deleted successfully!")


@app.command("add-to-playlist")
def add_to_playlist(
    playlist_id: Annotated[str, typer.Argument(help="Playlist ID.")],
    video_id: Annotated[str, typer.Argument(help="Video ID.")],
) -> None:
    """Add a video to a playlist."""
    with _reporting_errors():
        _status(f"➕ Adding video {video_id} to playlist {playlist_id}...\n")
        youtube_service.add_to_playlist(playlist_id, video_id)
    _status("✅ Video added to playlist successfully!")


# --- Videos ---


@app.command("search")
def search(
    query: Annotated[str, typer.Argument(help="Search terms.")],
    limit: Annotated[int, typer.Option(min=1, help="Maximum number of results (up to 50).")] = 10,
    json_output: JsonOption = False,
) -> None:
    """Search for videos on YouTube."""
    with _reporting_errors():
        _status(f'🔍 Searching for: "{query}"...\n')
        results = youtube_service.search_videos(query, limit)
    if json_output:
        typer.echo(format_json(results))
        return
    if results:
        _status(f"✅ Found {len(results)} video(s):\n")
    typer.echo(format_search_results(results))


@app.command("get-video")
def get_video(
    video_id: Annotated[str, typer.Argument(help="Video ID.")],
    json_output: JsonOption = False,
) -> None:
    """Get detailed information about a video."""
    with _reporting_errors():
        _status(f"📹 Fetching video info: {video_id}...\n")
        video = youtube_service.get_video(video_id)
    typer.echo(format_json(video) if json_output else format_video(video))


@app.command("download")
def download(
    url: Annotated[str, typer.Argument(help="Video URL.")],
    output: Annotated[str, typer.Option(help="Output directory.")] = ".",
    fmt: Annotated[str, typer.Option("--format", help="yt-dlp format selector.")] = "best",
    audio_only: Annotated[bool, typer.Option("--audio-only", help="Download audio only (MP3).")] = False,
) -> None:
    """Download a YouTube video using yt-dlp."""
    with _reporting_errors():
        _status(f"⬇️  Downloading video: {url}\n")
        download_service.download(url, output, fmt, audio_only, binary=get_settings().downloader_binary)
    _status("\n✅ Download completed successfully")


# --- Auth ---


@auth_app.command("login")
def auth_login() -> None:
    """Authenticate with YouTube via OAuth 2.0 in the browser."""
    with _reporting_errors():
        auth.login()
    _status("✅ Successfully authenticated with YouTube!")


@auth_app.command("status")
def auth_status(json_output: JsonOption = False) -> None:
    """Show whether a usable token is cached."""
    status = auth.auth_status()
    if json_output:
        typer.echo(format_json(status))
    else:
        typer.echo(f"{status.message} (token file: {status.token_file})")
    if not status.authenticated:
        raise typer.Exit(code=1)


@auth_app.command("logout")
def auth_logout() -> None:
    """Delete the cached token."""
    if auth.logout():
        _status("✅ Credentials cleared.")
    else:
        _status("No cached credentials to clear.")
