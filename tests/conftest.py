"""Shared pytest fixtures for clerc tests.

HTTP traffic is served by ``FakeRiak``, an in-memory stand-in for Riak's
REST interface mounted on ``httpx.MockTransport``. No network access is
required.
"""

import json
import logging

import httpx
import pytest

from clerc.client import RiakClient
from clerc.config import ClercConfig
from clerc.logging_config import TRACE_LOGGER

BASE_URL = "http://riak.test:8098"


class FakeRiak:
    """Minimal Riak HTTP API keeping objects in a dict of dicts.

    Every request is recorded in ``requests``. ``overrides`` maps a
    ``(method, path)`` pair to a canned ``httpx.Response``.
    """

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], httpx.Response] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        request.read()
        path = request.url.path
        canned = self.overrides.get((request.method, path))
        if canned is not None:
            return canned

        parts = [p for p in path.split("/") if p]
        if request.method == "GET" and parts == ["buckets"]:
            return httpx.Response(200, json={"buckets": list(self.buckets)})
        if request.method == "GET" and len(parts) == 3 and parts[0] == "buckets" and parts[2] == "keys":
            keys = list(self.buckets.get(parts[1], {}))
            return httpx.Response(200, json={"keys": keys})
        if request.method == "GET" and len(parts) == 4 and parts[0] == "buckets":
            body = self.buckets.get(parts[1], {}).get(parts[3])
            if body is None:
                return httpx.Response(404, text="not found\n")
            return httpx.Response(200, content=body)
        if request.method == "POST" and len(parts) == 3 and parts[0] == "riak":
            self.buckets.setdefault(parts[1], {})[parts[2]] = request.content
            return httpx.Response(204)
        if request.method == "DELETE" and len(parts) == 3 and parts[0] == "riak":
            removed = self.buckets.get(parts[1], {}).pop(parts[2], None)
            return httpx.Response(204 if removed is not None else 404)
        return httpx.Response(400, text="bad request")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def riak() -> FakeRiak:
    """A fake server seeded with two buckets."""
    fake = FakeRiak()
    fake.buckets["users"] = {
        "alice": json.dumps({"name": "Alice", "age": 30}).encode(),
        "bob": b"plain text, not json",
    }
    fake.buckets["empty"] = {}
    return fake


@pytest.fixture
def config() -> ClercConfig:
    return ClercConfig(server_url=BASE_URL)


@pytest.fixture
def verbose_config() -> ClercConfig:
    return ClercConfig(server_url=BASE_URL, verbose=True)


@pytest.fixture
def client(riak: FakeRiak, config: ClercConfig):
    with RiakClient(config, transport=riak.transport()) as c:
        yield c


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the home directory at an empty temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_loggers():
    """Keep handlers installed by one test from leaking into the next."""
    yield
    for name in ("clerc", TRACE_LOGGER):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
