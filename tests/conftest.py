import json
from urllib.parse import urlparse

import httpx
import pytest

from app.services import leetcode


def _status_or_json(entry) -> httpx.Response:
    if isinstance(entry, httpx.Response):
        return entry
    return httpx.Response(200, json=entry)


class FakeLeetCode:
    """Minimal stand-in for leetcode.com answering the three calls the service makes."""

    def __init__(self):
        self.recent: list | httpx.Response = []
        self.graphql_pages: list = []
        self.public_pages: list = []
        self.graphql_repeat = None
        self.public_repeat = None
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = urlparse(str(request.url)).path
        if path == "/graphql":
            body = json.loads(request.content)
            if "recentSubmissionList" in body["query"]:
                self.calls.append("recent")
                if isinstance(self.recent, httpx.Response):
                    return self.recent
                return httpx.Response(200, json={"data": {"recentSubmissionList": self.recent}})
            self.calls.append("graphql")
            variables = body["variables"]
            return self._page(self.graphql_pages, self.graphql_repeat, variables["offset"] // variables["limit"])
        if path.startswith("/api/submissions/"):
            self.calls.append("public")
            params = request.url.params
            return self._page(self.public_pages, self.public_repeat, int(params["offset"]) // int(params["limit"]))
        return httpx.Response(404)

    @staticmethod
    def _page(pages, repeat, index) -> httpx.Response:
        if repeat is not None:
            return _status_or_json(repeat)
        if index < len(pages):
            return _status_or_json(pages[index])
        return httpx.Response(200, json={})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @staticmethod
    def graphql_page(submissions, has_next) -> dict:
        return {"data": {"submissionList": {"hasNext": has_next, "submissions": submissions}}}

    @staticmethod
    def public_page(submissions, has_next) -> dict:
        return {"submissions_dump": submissions, "has_next": has_next}


@pytest.fixture
def fake():
    return FakeLeetCode()


@pytest.fixture
def patched_client(fake, monkeypatch):
    monkeypatch.setattr(leetcode, "make_client", fake.client)
    return fake
