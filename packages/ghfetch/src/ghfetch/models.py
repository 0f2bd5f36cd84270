"""GitHub API data models."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .errors import UnsupportedContentError


class GitHubContent(BaseModel):
    """GitHub content item (file, directory, symlink or submodule)."""

    name: str
    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    download_url: str | None = None
    sha: str | None = None
    size: int = 0
    url: str | None = None
    html_url: str | None = None
    git_url: str | None = None


class SingleFile(BaseModel):
    """Contents response for a path that is a file."""

    kind: Literal["file"] = "file"
    item: GitHubContent


class GitHubDirectory(BaseModel):
    """Contents response for a path that is a directory."""

    kind: Literal["dir"] = "dir"
    path: str
    items: list[GitHubContent] = Field(default_factory=list)


ContentListing = Annotated[SingleFile | GitHubDirectory, Field(discriminator="kind")]


def parse_contents(data: Any, path: str = "") -> SingleFile | GitHubDirectory:
    """
    Parse a contents API payload.

    The endpoint answers with a JSON array for directories and a JSON object
    for a single file.

    Args:
        data: Decoded JSON body
        path: Requested path, recorded on directory listings

    Returns:
        GitHubDirectory for arrays, SingleFile for file objects

    Raises:
        UnsupportedContentError: Payload has any other shape
    """
    try:
        if isinstance(data, list):
            return GitHubDirectory(path=path, items=[GitHubContent.model_validate(item) for item in data])
        if isinstance(data, dict) and data.get("type") == "file":
            return SingleFile(item=GitHubContent.model_validate(data))
    except ValidationError as e:
        raise UnsupportedContentError(f"Malformed contents response for '{path}': {e}") from e

    kind = data.get("type") if isinstance(data, dict) else type(data).__name__
    raise UnsupportedContentError(f"Unsupported contents response for '{path}': {kind}")
