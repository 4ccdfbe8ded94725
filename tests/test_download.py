import pytest
from unittest.mock import MagicMock

from youtube_manager.exceptions import DownloadError
from youtube_manager.services import download as download_service

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class TestBuildDownloadArgs:
    def test_defaults_merge_best_streams(self):
        args = download_service.build_download_args(URL)
        assert args == ["-o", "./%(title)s.%(ext)s", "-f", "bestvideo+bestaudio/best", URL]

    def test_custom_format_passed_through(self):
        args = download_service.build_download_args(URL, "videos", "mp4")
        assert args == ["-o", "videos/%(title)s.%(ext)s", "-f", "mp4", URL]

    def test_audio_only(self):
        args = download_service.build_download_args(URL, "music", audio_only=True)
        assert args == [
            "-o", "music/%(title)s.%(ext)s",
            "-f", "bestaudio/best",
            "-x",
            "--audio-format", "mp3",
            "--audio-quality", "192K",
            URL,
        ]

    def test_audio_only_ignores_format(self):
        args = download_service.build_download_args(URL, fmt="webm", audio_only=True)
        assert "webm" not in args
        assert args[-1] == URL


class TestDownload:
    @pytest.fixture
    def mock_which(self, mocker):
        return mocker.patch("youtube_manager.services.download.shutil.which", return_value="/usr/bin/yt-dlp")

    @pytest.fixture
    def mock_run(self, mocker):
        return mocker.patch(
            "youtube_manager.services.download.subprocess.run",
            return_value=MagicMock(returncode=0),
        )

    def test_runs_binary_with_args(self, mock_which, mock_run):
        download_service.download(URL, "out", "best", False)
        mock_which.assert_called_once_with("yt-dlp")
        cmd = mock_run.call_args.args[0]
        assert cmd[0] == "yt-dlp"
        assert cmd[1:] == download_service.build_download_args(URL, "out", "best", False)

    def test_custom_binary(self, mock_which, mock_run):
        download_service.download(URL, binary="/opt/bin/yt-dlp")
        assert mock_run.call_args.args[0][0] == "/opt/bin/yt-dlp"

    def test_missing_binary(self, mock_run, mocker):
        mocker.patch("youtube_manager.services.download.shutil.which", return_value=None)
        with pytest.raises(DownloadError, match="not found in PATH"):
            download_service.download(URL)
        mock_run.assert_not_called()

    def test_non_zero_exit(self, mock_which, mock_run):
        mock_run.return_value = MagicMock(returncode=2)
        with pytest.raises(DownloadError, match="status 2"):
            download_service.download(URL)

    def test_spawn_failure(self, mock_which, mock_run):
        mock_run.side_effect = PermissionError("denied")
        with pytest.raises(DownloadError, match="denied"):
            download_service.download(URL)
