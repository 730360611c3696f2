"""Minimal stand-ins for aiohttp sessions used by the tests."""

import json

import aiohttp


class FakeResponse:
    def __init__(self, status: int = 200, body: bytes | str | dict | list = b""):
        self.status = status
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def text(self) -> str:
        return self._body.decode("utf-8")

    async def read(self) -> bytes:
        return self._body

    async def json(self, content_type=None):
        return json.loads(self._body.decode("utf-8"))

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")


class FakeSession:
    """Serves canned responses keyed by URL and records every request.

    A route value may be a FakeResponse or an exception instance to raise.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = routes or {}
        self.calls: list[tuple[str, str, dict | None, object]] = []
        self.closed = False

    def _request(self, method: str, url: str, headers=None, params=None):
        self.calls.append((method, url, headers, params))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404, "not found")
        if isinstance(route, BaseException):
            raise route
        return route

    def get(self, url, headers=None, params=None):
        return self._request("GET", url, headers=headers, params=params)

    def post(self, url, headers=None, params=None, data=None):
        return self._request("POST", url, headers=headers, params=params)

    async def close(self):
        self.closed = True

    def urls(self, method: str | None = None) -> list[str]:
        return [url for m, url, _, _ in self.calls if method is None or m == method]
