"""HTTP client for Riak's REST interface."""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from clerc.config import ClercConfig
from clerc.errors import DecodeError, RequestError, StatusError
from clerc.output import trace

logger = logging.getLogger(__name__)

Model = TypeVar("Model", bound=BaseModel)


class BucketList(BaseModel):
    """Body of ``GET /buckets?buckets=true``."""

    buckets: list[str]


class KeyList(BaseModel):
    """Body of ``GET /buckets/<bucket>/keys?keys=true``."""

    keys: list[str]


def assert_status(response: httpx.Response, expected: int) -> None:
    """Raise StatusError unless *response* has the *expected* status code."""
    if response.status_code != expected:
        raise StatusError(expected, response.status_code, response.reason_phrase)


class RiakClient:
    """Blocking client for the store's HTTP data API.

    Requests are issued one at a time with no timeout and no retries. Each
    response body is read in full and released before a method returns.

    Resource paths are appended to the server URL as-is; bucket and key names
    are not escaped.

    Args:
        config: Resolved configuration (server URL and verbosity).
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self, config: ClercConfig, transport: httpx.BaseTransport | None = None
    ) -> None:
        self.config = config
        self._client = httpx.Client(transport=transport, timeout=None)

    def __enter__(self) -> RiakClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    # -- Request plumbing ----------------------------------------------------

    def _url(self, resource: str) -> str:
        return self.config.server_url + resource

    def _request(
        self,
        method: str,
        resource: str,
        expected: int | None = None,
        received: str | None = None,
        **kwargs,
    ) -> bytes:
        """Send one request and return its fully drained body.

        Args:
            method: HTTP method.
            resource: Path (and query) appended to the server URL.
            expected: Status code the response must have, or None to accept
                any status.
            received: Trace message emitted once the response has arrived,
                before its body is read.
            **kwargs: Passed through to ``httpx.Client.stream``.

        Raises:
            RequestError: If the request could not be sent or answered.
            StatusError: If the status differs from *expected*.
        """
        url = self._url(resource)
        try:
            with self._client.stream(method, url, **kwargs) as response:
                logger.debug(
                    "%s %s -> %d",
                    method,
                    url,
                    response.status_code,
                    extra={"method": method, "url": url, "status": response.status_code},
                )
                if expected is not None:
                    assert_status(response, expected)
                if received is not None:
                    trace(self.config, received)
                body = response.read()
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise RequestError(url, str(exc) or type(exc).__name__) from exc

        trace(self.config, "Got response: " + body.decode("utf-8", errors="replace"))
        return body

    def get_json(self, resource: str, model: type[Model]) -> Model:
        """GET *resource*, expect 200, and decode the body into *model*.

        Raises:
            DecodeError: If the body is not JSON of the expected shape.
        """
        trace(self.config, "Making request: " + self._url(resource))
        body = self._request("GET", resource, expected=200)
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise DecodeError(self._url(resource), exc.errors()[0]["msg"]) from exc

    # -- Operations ----------------------------------------------------------

    def list_buckets(self) -> list[str]:
        """Return bucket names in server order."""
        return self.get_json("/buckets?buckets=true", BucketList).buckets

    def list_keys(self, bucket: str) -> list[str]:
        """Return the keys of *bucket* in server order."""
        return self.get_json(f"/buckets/{bucket}/keys?keys=true", KeyList).keys

    def get_object(self, bucket: str, key: str) -> bytes:
        """Return the raw body of ``bucket/key``."""
        resource = f"/buckets/{bucket}/keys/{key}"
        trace(self.config, "Making request: " + self._url(resource))
        return self._request("GET", resource, expected=200)

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """Store *body* unchanged as ``bucket/key``; the server must answer 204."""
        resource = f"/riak/{bucket}/{key}"
        trace(self.config, "Making request: " + self._url(resource))
        self._request(
            "POST",
            resource,
            expected=204,
            content=body,
            headers={"Content-Type": "application/json"},
        )

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete ``bucket/key``. Any response status is accepted."""
        resource = f"/riak/{bucket}/{key}"
        trace(self.config, "Deleting: " + self._url(resource))
        self._request("DELETE", resource, received="Deleted object: " + key)
