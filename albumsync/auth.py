import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from loguru import logger
from requests_oauthlib import OAuth1, OAuth1Session

from albumsync.config import (
    ACCESS_TOKEN_URL,
    AUTHORIZE_URL,
    DEFAULT_TOKEN_FILE,
    PERMS,
    REQUEST_TOKEN_URL,
)
from albumsync.errors import ConfigurationError


@dataclass(frozen=True)
class FlickrCredentials:
    api_key: str
    shared_secret: str
    token: Optional[str] = None
    token_secret: Optional[str] = None

    @property
    def authorized(self) -> bool:
        return bool(self.token and self.token_secret)

    def auth(self) -> OAuth1:
        """Request signer for requests' `auth=` argument."""
        return OAuth1(
            self.api_key,
            client_secret=self.shared_secret,
            resource_owner_key=self.token,
            resource_owner_secret=self.token_secret,
        )


class AuthManager:
    """
    Manages Flickr API authentication: reads the token file and runs the
    OAuth flow when it has no access token yet.

    The token file is JSON:
        {"api_key": ..., "shared_secret": ..., "token": ..., "token_secret": ...}
    Only api_key and shared_secret need to be filled in by hand.
    """

    def __init__(self, token_file: Path = DEFAULT_TOKEN_FILE):
        self.token_file = Path(token_file)
        self.creds: Optional[FlickrCredentials] = None

    def load(self) -> FlickrCredentials:
        if not self.token_file.exists():
            raise ConfigurationError(f"Could not find token file {self.token_file}")
        with open(self.token_file, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Token file {self.token_file} is corrupt: {e}") from e

        if not data.get("api_key") or not data.get("shared_secret"):
            raise ConfigurationError(f"{self.token_file} needs both api_key and shared_secret")
        return FlickrCredentials(
            api_key=data["api_key"],
            shared_secret=data["shared_secret"],
            token=data.get("token"),
            token_secret=data.get("token_secret"),
        )

    def save(self, creds: FlickrCredentials):
        with open(self.token_file, "w", encoding="utf-8") as f:
            json.dump(asdict(creds), f, indent=2)

    def authenticate(self, prompt=input) -> FlickrCredentials:
        """
        Loads credentials from the token file; if there is no access token,
        performs the out-of-band OAuth flow and stores the result.
        """
        creds = self.load()
        if not creds.authorized:
            creds = self._run_flow(creds, prompt)
            self.save(creds)
        self.creds = creds
        return creds

    def _run_flow(self, creds: FlickrCredentials, prompt) -> FlickrCredentials:
        session = OAuth1Session(creds.api_key, client_secret=creds.shared_secret, callback_uri="oob")
        session.fetch_request_token(REQUEST_TOKEN_URL)
        url = session.authorization_url(AUTHORIZE_URL, perms=PERMS)
        logger.info("Authorize this application at: {}", url)
        verifier = prompt("Verifier code: ").strip()
        tokens = session.fetch_access_token(ACCESS_TOKEN_URL, verifier=verifier)
        return FlickrCredentials(
            api_key=creds.api_key,
            shared_secret=creds.shared_secret,
            token=tokens["oauth_token"],
            token_secret=tokens["oauth_token_secret"],
        )
