"""Video downloads through the yt-dlp command-line tool."""

import logging
import os
import shutil
import subprocess

from youtube_manager.exceptions import DownloadError

OUTPUT_TEMPLATE = "%(title)s.%(ext)s"

INSTALL_HINT = (
    "Please install it first:\n"
    "  brew install yt-dlp  (macOS)\n"
    "  pip install yt-dlp   (pip)"
)

logger = logging.getLogger(__name__)


def build_download_args(url: str, output_dir: str = ".", fmt: str = "best", audio_only: bool = False) -> list[str]:
    """Assemble yt-dlp arguments (without the binary itself).

    ``audio_only`` wins over ``fmt``: the best audio stream is extracted to a
    192K MP3. Otherwise ``best`` merges the best video and audio streams and
    any other value is passed to ``-f`` as-is.
    """
    args = ["-o", os.path.join(output_dir, OUTPUT_TEMPLATE)]

    if audio_only:
        args += ["-f", "bestaudio/best", "-x", "--audio-format", "mp3", "--audio-quality", "192K"]
    elif fmt == "best":
        args += ["-f", "bestvideo+bestaudio/best"]
    else:
        args += ["-f", fmt]

    args.append(url)
    return args


def download(
    url: str,
    output_dir: str = ".",
    fmt: str = "best",
    audio_only: bool = False,
    binary: str = "yt-dlp",
) -> None:
    """Run yt-dlp with stdout/stderr streamed to the terminal."""
    if shutil.which(binary) is None:
        raise DownloadError(f"{binary} not found in PATH. {INSTALL_HINT}")

    cmd = [binary, *build_download_args(url, output_dir, fmt, audio_only)]
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd)
    except OSError as e:
        raise DownloadError(f"Error downloading video: {e}") from e
    if proc.returncode != 0:
        raise DownloadError(f"Error downloading video: {binary} exited with status {proc.returncode}")
