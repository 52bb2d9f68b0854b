"""Shared fixtures for TVDB client tests."""

import json
from dataclasses import dataclass, field
from typing import Dict, Optional

import pytest
import requests

from tvdbclient.auth import CredentialStore
from tvdbclient.client import Client
from tvdbclient.config import Config

BASE_URL = "https://tvdb.test/v4"


def make_response(status_code: int, body=None, text: Optional[str] = None) -> requests.Response:
    """Build a fully read response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = {200: "OK", 401: "Unauthorized", 404: "Not Found"}.get(status_code, "")
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    response._content_consumed = True
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


def login_response(token: str = "test-token") -> requests.Response:
    return make_response(200, {"status": "success", "data": {"token": token}})


@dataclass
class SentRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[bytes] = None

    def json(self):
        return json.loads(self.data)


class FakeTransport:
    """Returns queued responses in order and records every request sent."""

    def __init__(self):
        self.responses = []
        self.requests = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    def send(self, method, url, headers=None, data=None):
        request = SentRequest(method, url, dict(headers or {}), data)
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return item

    def urls(self):
        return [r.url for r in self.requests]

    def login_count(self):
        return sum(1 for r in self.requests if r.url.endswith("/login"))

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def credentials(transport):
    return CredentialStore("test-api-key", transport, BASE_URL)


@pytest.fixture
def client(credentials, transport):
    """Client whose credentials already hold ``test-token``."""
    transport.queue(login_response("test-token"))
    credentials.login()
    transport.requests.clear()
    return Client(credentials, transport)


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("TVDB_BASE_URL", raising=False)
    return Config(str(tmp_path / "config"))
