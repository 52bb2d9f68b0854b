"""Authenticated request pipeline and typed JSON access for the TVDB API."""
import json
import logging
from typing import Any, Dict, Optional

import requests

from tvdbclient.auth import AUTH_HEADER, CredentialStore, bearer
from tvdbclient.errors import (
    AuthError,
    DecodeError,
    EncodeError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from tvdbclient.models import decode, encode
from tvdbclient.transport import Transport

logger = logging.getLogger(__name__)


class Client:
    """Sends authenticated requests and decodes their responses.

    The client holds a reference to a ``CredentialStore`` and a ``Transport``.
    Every request carries the current bearer token. A 401 answer triggers a
    single token refresh followed by exactly one replay of the request.
    """

    def __init__(self, credentials: CredentialStore, transport: Transport, base_url: Optional[str] = None):
        self.credentials = credentials
        self.transport = transport
        self.base_url = base_url or credentials.base_url

    def set_base_url(self, url: str):
        """Point the client and its login endpoint at another server."""
        self.base_url = url
        self.credentials.base_url = url

    def execute(self, method: str, path: str, body: Optional[bytes] = None) -> requests.Response:
        """Send a request with the bearer token and recover once from a 401.

        Returns the raw response for any status. If the refreshed request is
        rejected again, that second 401 response is returned as-is.

        Raises:
            NetworkError: if no response could be obtained
            AuthError: if the token refresh after a 401 fails
        """
        url = self.base_url + path
        token = self.credentials.token
        response = self.transport.send(method, url, headers=self._headers(token, body), data=body)
        if response.status_code != 401:
            return response

        logger.warning(f"{method} {path} was unauthorized, refreshing token")
        response.close()
        try:
            self.credentials.refresh(stale_token=token)
        except AuthError as e:
            raise AuthError(f"error refreshing token: {e}", method, path) from e

        token = self.credentials.token
        response = self.transport.send(method, url, headers=self._headers(token, body), data=body)
        if response.status_code == 401:
            logger.error(f"{method} {path} still unauthorized after token refresh")
        return response

    def get_json(self, path: str, shape: Any, envelope: bool = True) -> Any:
        """GET ``path`` and decode the body into ``shape``.

        With ``envelope`` set, the ``data`` member of the body is decoded
        instead of the whole body.
        """
        response = self.execute("GET", path)
        return self._decode(response, "GET", path, shape, envelope)

    def post_json(self, path: str, body: Any, shape: Any, envelope: bool = True) -> Any:
        """POST ``body`` as JSON to ``path`` and decode the body into ``shape``."""
        try:
            data = json.dumps(encode(body), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(f"error marshaling request body: {e}", "POST", path) from e
        response = self.execute("POST", path, data)
        return self._decode(response, "POST", path, shape, envelope)

    def _headers(self, token: Optional[str], body: Optional[bytes]) -> Dict[str, str]:
        headers = {}
        if token:
            headers[AUTH_HEADER] = bearer(token)
        if body is not None:
            headers["Content-Type"] = "application/json"
        return headers

    def _decode(self, response: requests.Response, method: str, path: str, shape: Any, envelope: bool) -> Any:
        if response.status_code == 401:
            raise UnauthorizedError(method, path)
        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code, method, path)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"error decoding response: {e}", method, path) from e

        if envelope:
            if not isinstance(payload, dict) or "data" not in payload:
                raise DecodeError("response has no data envelope", method, path)
            payload = payload["data"]

        try:
            return decode(shape, payload)
        except DecodeError as e:
            raise DecodeError(f"error decoding response: {e}", method, path) from e
