"""CLI for repokit."""

import logging
from pathlib import Path

import click
from curlify import Request, to_curl
from dotenv import load_dotenv
from ghfetch import (
    GitHubClient,
    MissingTokenError,
    download_directory,
    download_file,
    get_token,
    require_token,
)
from pydantic import ValidationError

logger = logging.getLogger(__name__)

TOKEN_PLACEHOLDER = "$GITHUB_TOKEN"


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def make_client(ctx: click.Context, required: bool) -> GitHubClient:
    """Build a client from group options, exiting with status 1 if a token is required but missing."""
    opts = ctx.obj
    try:
        if required:
            token = require_token(opts["token"], use_gh_cli=opts["use_gh_cli"])
        else:
            token = get_token(opts["token"], use_gh_cli=opts["use_gh_cli"])
    except MissingTokenError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Set in .env or: export GITHUB_TOKEN=ghp_xxx", err=True)
        raise SystemExit(1)
    return GitHubClient(token=token, base_url=opts["base_url"], max_retries=opts["retries"])


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar=["GH_TOKEN", "GITHUB_TOKEN"], help="GitHub token")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.option("--base-url", default=None, help="GitHub API base URL")
@click.option("--retries", "-r", type=int, default=1, show_default=True, help="Attempts on network errors")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(
    ctx: click.Context,
    token: str | None,
    use_gh_cli: bool,
    base_url: str | None,
    retries: int,
    verbose: int,
) -> None:
    """Download GitHub repository content and render requests as curl."""
    load_dotenv()
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(token=token, use_gh_cli=use_gh_cli, base_url=base_url, retries=retries)


# ============ Download Commands ============

@cli.command()
@click.argument("owner")
@click.argument("repo")
@click.argument("path", default="")
@click.option("-b", "--branch", default="main", show_default=True)
@click.option("-o", "--output-dir", default=".", show_default=True, type=click.Path(file_okay=False))
@click.pass_context
def download(ctx, owner, repo, path, branch, output_dir):
    """Recursively download PATH from OWNER/REPO."""
    client = make_client(ctx, required=True)
    written = download_directory(client, owner, repo, path, branch, Path(output_dir))
    for file_path in written:
        click.echo(f"  {file_path}")
    click.echo(f"\nSaved {len(written)} files to {output_dir}")


@cli.command("file")
@click.argument("owner")
@click.argument("repo")
@click.argument("path")
@click.option("-b", "--branch", default="main", show_default=True)
@click.option("-o", "--output-file", required=True, type=click.Path(dir_okay=False))
@click.pass_context
def file_(ctx, owner, repo, path, branch, output_file):
    """Download the single file PATH from OWNER/REPO."""
    client = make_client(ctx, required=False)
    saved = download_file(client, owner, repo, path, branch, Path(output_file))
    click.echo(f"File saved to: {saved}")


# ============ Curl Commands ============

@cli.command()
@click.argument("request_file", type=click.File("r", encoding="utf-8"))
def curl(request_file):
    """
    Print the curl command for a JSON request description.

    REQUEST_FILE holds e.g. {"method": "POST", "url": "...", "headers": {...},
    "body": {"kind": "json", "data": {...}}}. Use - to read stdin.
    """
    try:
        req = Request.model_validate_json(request_file.read())
    except ValidationError as e:
        click.echo(f"Error: invalid request description\n{e}", err=True)
        raise SystemExit(1)
    click.echo(to_curl(req))


@cli.command("contents-curl")
@click.argument("owner")
@click.argument("repo")
@click.argument("path", default="")
@click.option("-b", "--branch", default="main", show_default=True)
@click.option("--raw", is_flag=True, help="Raw-content request instead of metadata")
@click.pass_context
def contents_curl(ctx, owner, repo, path, branch, raw):
    """
    Print the curl command for the contents request of PATH.

    The token is written as the shell variable $GITHUB_TOKEN.
    """
    client = GitHubClient(token=TOKEN_PLACEHOLDER, base_url=ctx.obj["base_url"])
    click.echo(to_curl(client.contents_request(owner, repo, path, branch, raw=raw)))


if __name__ == "__main__":
    cli()
