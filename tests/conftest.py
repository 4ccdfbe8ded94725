import pytest
from unittest.mock import MagicMock

from typer.testing import CliRunner

from youtube_manager.config import get_settings


# --- Canned API responses ---

YOUTUBE_API_PLAYLIST = {
    "id": "PL123",
    "snippet": {
        "title": "Road trip",
        "description": "Songs for the car",
    },
    "status": {"privacyStatus": "private"},
    "contentDetails": {"itemCount": 12},
}

YOUTUBE_API_PLAYLIST_LIST = {"items": [YOUTUBE_API_PLAYLIST]}


def make_playlist_item(video_id: str, position: int = 0) -> dict:
    return {
        "id": f"PLI_{video_id}",
        "snippet": {
            "playlistId": "PL123",
            "title": f"Video {video_id}",
            "channelTitle": "Playlist Owner",
            "videoOwnerChannelTitle": "Some Channel",
            "position": position,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
        },
        "contentDetails": {"videoId": video_id},
    }


YOUTUBE_API_VIDEO = {
    "id": "dQw4w9WgXcQ",
    "snippet": {
        "title": "Never Gonna Give You Up",
        "description": "The official video.",
        "channelTitle": "Rick Astley",
        "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "publishedAt": "2009-10-25T06:57:33Z",
    },
    "contentDetails": {"duration": "PT3M33S"},
    "statistics": {"viewCount": "1500000000", "likeCount": "17000000", "commentCount": "2300000"},
}

YOUTUBE_API_SEARCH = {
    "items": [
        {
            "etag": "etag1",
            "id": {"kind": "youtube#video", "videoId": "vid1"},
            "snippet": {
                "title": "Python tutorial",
                "channelTitle": "Teaching Channel",
                "description": "Learn Python in one hour.",
            },
        },
    ],
}


@pytest.fixture
def mock_youtube_credentials(mocker):
    return mocker.patch("youtube_manager.services.youtube.get_credentials", return_value=MagicMock())


@pytest.fixture
def mock_youtube_build(mocker):
    mock_svc = MagicMock()
    mocker.patch("youtube_manager.services.youtube.build", return_value=mock_svc)
    return mock_svc


@pytest.fixture
def mock_youtube_service(mock_youtube_credentials, mock_youtube_build):
    """Fully mocked YouTube API service."""
    return mock_youtube_build


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing every credential path into a temp directory."""
    monkeypatch.setenv("CREDENTIALS_DIR", str(tmp_path / "credentials"))
    for name in ("CLIENT_SECRET_FILE", "TOKEN_FILE", "DOWNLOADER_BINARY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def cli_runner():
    return CliRunner()
