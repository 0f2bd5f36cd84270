import httpx
import pytest

from ghfetch import GitHubClient

API = "https://api.github.com"
RAW = "https://raw.githubusercontent.com"


class FakeGitHub:
    """In-memory contents API keyed by full request URL."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add_json(self, url, data):
        self.routes[url] = httpx.Response(200, json=data)

    def add_raw(self, url, content):
        self.routes[url] = httpx.Response(200, content=content)

    def handler(self, request):
        self.requests.append(request)
        response = self.routes.get(str(request.url))
        if response is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return response

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    def urls(self):
        return [str(r.url) for r in self.requests]


def file_entry(path, download_url=None):
    return {
        "name": path.rsplit("/", 1)[-1],
        "path": path,
        "sha": "abc123",
        "size": 3,
        "type": "file",
        "download_url": download_url,
    }


def dir_entry(path):
    return {
        "name": path.rsplit("/", 1)[-1],
        "path": path,
        "sha": "def456",
        "size": 0,
        "type": "dir",
        "download_url": None,
    }


@pytest.fixture(autouse=True)
def no_token_env(monkeypatch):
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def fake():
    return FakeGitHub()


@pytest.fixture
def client(fake):
    return GitHubClient(token="secret", transport=fake.transport)
