class YouTubeManagerError(Exception):
    """Base class for errors reported to the user."""


class AuthenticationError(YouTubeManagerError):
    """Raised when OAuth credentials are missing or invalid."""


class IntegrationError(YouTubeManagerError):
    """Raised when a YouTube API call fails."""


class RateLimitError(YouTubeManagerError):
    """Raised when the YouTube API quota or rate limit is hit."""


class DownloadError(YouTubeManagerError):
    """Raised when the external downloader is missing or fails."""
