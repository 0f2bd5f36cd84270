"""GitHub repository content fetcher."""

from .client import GitHubClient, get_token, require_token
from .download import download_directory, download_file, download_github_dir, download_github_file
from .errors import GhFetchError, MissingTokenError, UnsupportedContentError
from .models import ContentListing, GitHubContent, GitHubDirectory, SingleFile, parse_contents

__all__ = [
    "GitHubClient",
    "GitHubContent",
    "GitHubDirectory",
    "SingleFile",
    "ContentListing",
    "parse_contents",
    "get_token",
    "require_token",
    "download_directory",
    "download_file",
    "download_github_dir",
    "download_github_file",
    "GhFetchError",
    "MissingTokenError",
    "UnsupportedContentError",
]
