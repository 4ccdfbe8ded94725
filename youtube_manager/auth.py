import json
import logging
import os
from pathlib import Path

# Allow Google to return broader scopes than requested (e.g. from prior grants)
os.environ["OAUTHLIB_RELAX_TOKEN_SCOPE"] = "1"

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from youtube_manager.config import get_settings
from youtube_manager.exceptions import AuthenticationError
from youtube_manager.models.common import AuthStatus

SCOPES = [
    "https://www.googleapis.com/auth/youtube.readonly",
    "https://www.googleapis.com/auth/youtube.force-ssl",
]

logger = logging.getLogger(__name__)


class TokenStore:
    """Reads/writes the cached OAuth token to a local JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> dict | None:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token file %s", self.path)
            return None

    def save(self, token_data: dict) -> None:
        logger.info("Saving credentials to %s", self.path)
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        self.path.write_text(json.dumps(token_data, indent=2))
        self.path.chmod(0o600)

    def clear(self) -> bool:
        if not self.path.exists():
            return False
        self.path.unlink()
        return True

    def has_valid_token(self) -> bool:
        creds = _credentials_from_token(self.load())
        if creds is None:
            return False
        return bool(creds.valid or (creds.expired and creds.refresh_token))


def _get_token_store() -> TokenStore:
    return TokenStore(get_settings().token_path)


def _credentials_from_token(token_data: dict | None) -> Credentials | None:
    if not token_data:
        return None
    try:
        return Credentials.from_authorized_user_info(token_data, SCOPES)
    except ValueError as e:
        logger.warning("Cached token is incomplete, ignoring it: %s", e)
        return None


def _create_flow() -> InstalledAppFlow:
    path = get_settings().client_secret_path
    if not path.exists():
        raise AuthenticationError(
            f"OAuth client credentials file not found at {path}. "
            "Create a Desktop OAuth client in Google Cloud Console, download its JSON and save it there."
        )
    try:
        return InstalledAppFlow.from_client_secrets_file(str(path), scopes=SCOPES)
    except ValueError as e:
        raise AuthenticationError(f"Unable to parse client credentials {path}: {e}") from e


def _save_token(store: TokenStore, creds: Credentials) -> None:
    """Persist credentials. A failed write is not fatal, the token stays usable for this run."""
    try:
        store.save(json.loads(creds.to_json()))
    except OSError as e:
        logger.warning("Unable to save token to %s: %s", store.path, e)


def _token_from_web(flow: InstalledAppFlow) -> Credentials:
    try:
        return flow.run_local_server(
            port=get_settings().oauth_port,
            authorization_prompt_message="Go to the following link in your browser:\n{url}\n",
            success_message="Authentication complete. You can close this tab.",
        )
    except Exception as e:
        raise AuthenticationError(f"Unable to retrieve token from web: {e}") from e


def get_credentials(interactive: bool = True) -> Credentials:
    """Return usable credentials, refreshing or minting a token as needed.

    The client credentials file is required even when a cached token exists.
    Without a cached token, ``interactive=True`` opens the browser consent flow
    and stores the resulting token; otherwise AuthenticationError is raised.
    """
    flow = _create_flow()
    store = _get_token_store()
    creds = _credentials_from_token(store.load())

    if creds is not None:
        if creds.valid:
            return creds
        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                _save_token(store, creds)
                return creds
            except RefreshError as e:
                if not interactive:
                    raise AuthenticationError(f"Unable to refresh token: {e}") from e
                logger.warning("Token refresh failed, re-authenticating: %s", e)

    if not interactive:
        raise AuthenticationError("YouTube not authenticated. Run `youtube-manager auth login` to connect.")

    creds = _token_from_web(flow)
    _save_token(store, creds)
    return creds


def login() -> Credentials:
    """Force a fresh browser consent, replacing any cached token."""
    flow = _create_flow()
    creds = _token_from_web(flow)
    _save_token(_get_token_store(), creds)
    return creds


def logout() -> bool:
    return _get_token_store().clear()


def auth_status() -> AuthStatus:
    """Check whether a usable token is cached."""
    store = _get_token_store()
    valid = store.has_valid_token()
    return AuthStatus(
        authenticated=valid,
        token_file=str(store.path),
        message="Authenticated" if valid else "Not authenticated. Run `youtube-manager auth login` to connect.",
    )
