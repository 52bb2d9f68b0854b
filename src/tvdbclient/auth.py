"""Credential store for the TVDB API."""
import json
import logging
import threading
from typing import Optional

from tvdbclient.errors import AuthError, NetworkError
from tvdbclient.transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api4.thetvdb.com/v4"
LOGIN_PATH = "/login"
AUTH_HEADER = "Authorization"


def bearer(token: Optional[str]) -> str:
    """Format a token as a bearer credential, or an empty string without one."""
    if not token:
        return ""
    return f"Bearer {token}"


class CredentialStore:
    """Holds the API key and the bearer token obtained from it.

    The token is only replaced by a successful login. All reads and
    writes of the token go through a lock so that concurrent callers
    observe a single refresh.
    """

    def __init__(self, api_key: str, transport: Transport, base_url: str = DEFAULT_BASE_URL):
        self._api_key = api_key
        self.transport = transport
        self.base_url = base_url
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def login(self):
        """Exchange the API key for a bearer token.

        Raises:
            AuthError: if the request fails, the status is not 200, the body
                cannot be decoded or no token is returned
        """
        with self._lock:
            self._login()

    def refresh(self, stale_token: Optional[str] = None):
        """Obtain a new token by logging in again.

        The API has no refresh endpoint, so this is a plain re-login. When
        ``stale_token`` is given and another caller has already replaced it,
        the new token is reused and no login is sent. On failure the previous
        token is left untouched.
        """
        with self._lock:
            if stale_token is not None and self._token and self._token != stale_token:
                logger.debug("Token already refreshed by another request")
                return
            logger.info("Refreshing TVDB token")
            self._login()

    def auth_header_value(self) -> str:
        """Return the bearer credential, or an empty string before login."""
        return bearer(self.token)

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _login(self):
        body = json.dumps({"apikey": self._api_key}).encode("utf-8")
        try:
            response = self.transport.send(
                "POST",
                self.base_url + LOGIN_PATH,
                headers={"Content-Type": "application/json"},
                data=body
            )
        except NetworkError as e:
            raise AuthError(f"error sending login request: {e}", "POST", LOGIN_PATH) from e

        if response.status_code != 200:
            raise AuthError(f"login failed with status: {response.status_code} {response.reason}",
                            "POST", LOGIN_PATH)

        try:
            token = response.json()["data"]["token"]
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(f"error decoding login response: {e}", "POST", LOGIN_PATH) from e

        if not token or not isinstance(token, str):
            raise AuthError("no token received in login response", "POST", LOGIN_PATH)

        self._token = token
        logger.info("Authenticated with TVDB")
