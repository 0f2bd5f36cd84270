"""Download repository files to the local filesystem."""

import logging
from pathlib import Path
from typing import Any

from .client import GitHubClient, get_token
from .models import GitHubContent, SingleFile

logger = logging.getLogger(__name__)


def _save(client: GitHubClient, owner: str, repo: str, item: GitHubContent, ref: str, output_dir: Path) -> Path:
    target = output_dir / item.path
    target.parent.mkdir(parents=True, exist_ok=True)
    if item.download_url:
        content = client.get_raw(item.download_url)
    else:
        content = client.get_raw_file(owner, repo, item.path, ref)
    target.write_bytes(content)
    logger.info("File saved to: %s", target)
    return target


def download_directory(
    client: GitHubClient,
    owner: str,
    repo: str,
    path: str,
    ref: str,
    output_dir: str | Path,
) -> list[Path]:
    """
    Download everything under a repository path, depth first.

    Files land at ``output_dir / <repository path>``. Entries are handled one
    at a time; on failure, files already written are left in place.

    Args:
        client: Authenticated GitHub client
        owner: Repository owner
        repo: Repository name
        path: File or directory path in the repository
        ref: Branch/tag/commit
        output_dir: Local root directory

    Returns:
        Written file paths, in write order
    """
    output_dir = Path(output_dir)
    listing = client.get_contents(owner, repo, path, ref)

    if isinstance(listing, SingleFile):
        return [_save(client, owner, repo, listing.item, ref, output_dir)]

    written: list[Path] = []
    for item in listing.items:
        if item.type == "file":
            written.append(_save(client, owner, repo, item, ref, output_dir))
        elif item.type == "dir":
            logger.debug("Recursing into directory: %s", item.path)
            written.extend(download_directory(client, owner, repo, item.path, ref, output_dir))
        else:
            logger.warning("Skipping %s entry: %s", item.type, item.path)

    logger.info("Downloaded %d files from %s", len(written), path or "/")
    return written


def download_file(
    client: GitHubClient,
    owner: str,
    repo: str,
    path: str,
    ref: str,
    output_file: str | Path,
) -> Path:
    """Download one known file straight from the raw-content endpoint."""
    output_file = Path(output_file)
    content = client.get_raw_file(owner, repo, path, ref)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_bytes(content)
    logger.info("File saved to: %s", output_file)
    return output_file


def download_github_dir(
    owner: str,
    repo: str,
    path: str,
    branch: str,
    output_dir: str | Path,
    token: str | None = None,
    use_gh_cli: bool = False,
    **client_kwargs: Any,
) -> list[Path]:
    """
    Recursively download a repository path.

    The token is resolved before anything is sent; MissingTokenError is
    raised when neither GH_TOKEN nor GITHUB_TOKEN is set.
    """
    client = GitHubClient.from_env(token, use_gh_cli=use_gh_cli, **client_kwargs)
    return download_directory(client, owner, repo, path, branch, output_dir)


def download_github_file(
    owner: str,
    repo: str,
    file_path: str,
    branch: str,
    output_file: str | Path,
    token: str | None = None,
    use_gh_cli: bool = False,
    **client_kwargs: Any,
) -> Path:
    """Download a single file; an unresolved token sends the request anonymously."""
    client = GitHubClient(token=get_token(token, use_gh_cli=use_gh_cli), **client_kwargs)
    return download_file(client, owner, repo, file_path, branch, output_file)
