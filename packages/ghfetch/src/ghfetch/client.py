"""GitHub contents API client."""

import logging
import os
import subprocess
from typing import Any
from urllib.parse import quote

import httpx
from curlify import Request
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from .errors import MissingTokenError
from .models import ContentListing, parse_contents

logger = logging.getLogger(__name__)

# Retry configuration
DEFAULT_MAX_RETRIES = 1  # attempts; 1 means no retry
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds

TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")

JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"

# Retryable exceptions
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    httpx.NetworkError,
)


def get_token_from_gh_cli() -> str | None:
    """
    Get GitHub token from gh cli.

    Returns:
        Token string or None if gh cli not available/authenticated
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip():
            logger.info("Using token from gh cli")
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug("gh cli not available: %s", e)
    return None


def get_token(token: str | None = None, use_gh_cli: bool = False) -> str | None:
    """
    Get GitHub token from various sources.

    Priority:
    1. Explicitly provided token
    2. Environment variable GH_TOKEN, then GITHUB_TOKEN
    3. gh cli (`gh auth token`) - only if use_gh_cli=True

    Args:
        token: Explicitly provided token
        use_gh_cli: Whether to use gh cli credentials (requires user consent)

    Returns:
        GitHub token or None
    """
    if token:
        logger.debug("Using explicitly provided token")
        return token

    for name in TOKEN_ENV_VARS:
        env_token = os.environ.get(name)
        if env_token:
            logger.info("Using token from environment variable %s", name)
            return env_token

    if use_gh_cli:
        return get_token_from_gh_cli()

    return None


def require_token(token: str | None = None, use_gh_cli: bool = False) -> str:
    """Like get_token, but raise MissingTokenError when nothing is found."""
    resolved = get_token(token, use_gh_cli=use_gh_cli)
    if not resolved:
        raise MissingTokenError(
            "GitHub token not found: set " + " or ".join(TOKEN_ENV_VARS)
        )
    return resolved


def _log_url(url: str) -> str:
    """Drop the query string; download URLs of private repos carry a token there."""
    return str(httpx.URL(url).copy_with(query=None))


def create_retry_decorator(max_retries: int = DEFAULT_MAX_RETRIES):
    """Create a retry decorator with specified max attempts."""
    return retry(
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=1, min=DEFAULT_MIN_WAIT, max=DEFAULT_MAX_WAIT),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class GitHubClient:
    """GitHub contents API client.

    Every call is described as a ``curlify.Request`` before it is sent, so
    callers can render it with ``curlify.to_curl``.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: Resolved GitHub token (see get_token/require_token)
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts on network errors (default: 1)
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.transport = transport
        self.headers = {"User-Agent": "repokit"}

        if token:
            self.headers["Authorization"] = f"Bearer {token}"
            logger.debug("GitHub client initialized with token")
        else:
            logger.warning("GitHub client initialized without token (rate limited)")
        logger.info("GitHub client ready, base_url=%s, max_retries=%d", self.base_url, max_retries)

    @classmethod
    def from_env(cls, token: str | None = None, use_gh_cli: bool = False, **kwargs: Any) -> "GitHubClient":
        """Create a client, failing with MissingTokenError if no token is set."""
        return cls(token=require_token(token, use_gh_cli=use_gh_cli), **kwargs)

    def contents_url(self, owner: str, repo: str, path: str = "", ref: str | None = None) -> str:
        """Build the contents endpoint URL for a repository path."""
        url = f"{self.base_url}/repos/{owner}/{repo}/contents/{quote(path.strip('/'))}"
        if ref:
            url += f"?ref={quote(ref, safe='')}"
        return url

    def build_request(self, url: str, accept: str = JSON_MEDIA_TYPE) -> Request:
        """Describe an authenticated GET request."""
        return Request(url=url, method="GET", headers={**self.headers, "Accept": accept})

    def contents_request(
        self, owner: str, repo: str, path: str = "", ref: str | None = None, raw: bool = False
    ) -> Request:
        """Describe the metadata (or raw-content) request for a path."""
        url = self.contents_url(owner, repo, path, ref)
        return self.build_request(url, RAW_MEDIA_TYPE if raw else JSON_MEDIA_TYPE)

    def send(self, req: Request) -> httpx.Response:
        """Send a request description with retry on network errors."""

        @create_retry_decorator(self.max_retries)
        def do_request() -> httpx.Response:
            logger.debug("Request: %s %s", req.method, _log_url(req.url))
            with httpx.Client(
                timeout=self.timeout, transport=self.transport, follow_redirects=True
            ) as client:
                response = client.send(req.to_httpx())
                logger.debug(
                    "Response: %s %s (status=%d)",
                    req.method,
                    _log_url(req.url),
                    response.status_code,
                )
                response.raise_for_status()
                return response

        return do_request()

    def get_contents(
        self, owner: str, repo: str, path: str = "", ref: str = "main"
    ) -> ContentListing:
        """
        Get repository contents metadata.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Path in repository (empty for root)
            ref: Branch/tag/commit (default: main)

        Returns:
            SingleFile for a file path, GitHubDirectory for a directory
        """
        logger.info("Fetching contents: %s/%s path=%s ref=%s", owner, repo, path, ref)
        response = self.send(self.contents_request(owner, repo, path, ref))
        listing = parse_contents(response.json(), path)
        if listing.kind == "dir":
            logger.debug("Directory listing: %d items", len(listing.items))
        else:
            logger.debug("Single file response: %s", listing.item.name)
        return listing

    def get_raw(self, url: str) -> bytes:
        """Download raw bytes from a URL such as a download_url."""
        logger.debug("Downloading: %s", _log_url(url))
        content = self.send(self.build_request(url, RAW_MEDIA_TYPE)).content
        logger.debug("Downloaded %s (%d bytes)", _log_url(url), len(content))
        return content

    def get_raw_file(self, owner: str, repo: str, path: str, ref: str = "main") -> bytes:
        """Download raw file bytes through the contents endpoint."""
        logger.info("Fetching raw file: %s/%s path=%s ref=%s", owner, repo, path, ref)
        return self.get_raw(self.contents_url(owner, repo, path, ref))
