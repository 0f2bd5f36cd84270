import functools
import json

import pytest
from click.testing import CliRunner

import repokit.cli as cli_module
from ghfetch import GitHubClient

from conftest import API, RAW, dir_entry, file_entry


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def patched_client(monkeypatch, fake):
    monkeypatch.setattr(cli_module, "GitHubClient", functools.partial(GitHubClient, transport=fake.transport))


def test_download_requires_token(runner, fake, patched_client, tmp_path):
    result = runner.invoke(cli_module.cli, ["download", "octo", "hello", "docs", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "GitHub token not found" in result.output
    assert fake.requests == []


def test_download_writes_tree(runner, fake, patched_client, tmp_path):
    fake.add_json(f"{API}/repos/octo/hello/contents/docs?ref=main", [file_entry("docs/a.md", f"{RAW}/a.md"), dir_entry("docs/sub")])
    fake.add_json(f"{API}/repos/octo/hello/contents/docs/sub?ref=main", [file_entry("docs/sub/b.md", f"{RAW}/b.md")])
    fake.add_raw(f"{RAW}/a.md", b"A")
    fake.add_raw(f"{RAW}/b.md", b"B")

    result = runner.invoke(
        cli_module.cli,
        ["download", "octo", "hello", "docs", "-o", str(tmp_path)],
        env={"GITHUB_TOKEN": "tok"},
    )

    assert result.exit_code == 0, result.output
    assert "Saved 2 files" in result.output
    assert (tmp_path / "docs" / "sub" / "b.md").read_bytes() == b"B"
    assert fake.requests[0].headers["Authorization"] == "Bearer tok"


def test_file_command(runner, fake, patched_client, tmp_path):
    fake.add_raw(f"{API}/repos/octo/hello/contents/x.csv?ref=dev", b"1,2")
    output = tmp_path / "x.csv"

    result = runner.invoke(
        cli_module.cli,
        ["--token", "tok", "file", "octo", "hello", "x.csv", "-b", "dev", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"1,2"


def test_curl_from_json_description(runner):
    description = {
        "method": "POST",
        "url": "https://httpbin.org/post",
        "headers": {"Content-Type": "application/json"},
        "body": {"kind": "json", "data": {"a": 1, "b": 2}},
    }
    result = runner.invoke(cli_module.cli, ["curl", "-"], input=json.dumps(description))
    assert result.exit_code == 0, result.output
    assert result.output == (
        "curl -X POST \\\n"
        '  -H "Content-Type: application/json" \\\n'
        "  -d '{\"a\":1,\"b\":2}' \\\n"
        '  "https://httpbin.org/post"\n'
    )


def test_curl_rejects_invalid_description(runner):
    result = runner.invoke(cli_module.cli, ["curl", "-"], input='{"method": "GET"}')
    assert result.exit_code == 1
    assert "invalid request description" in result.output


def test_contents_curl_hides_token(runner):
    result = runner.invoke(
        cli_module.cli,
        ["contents-curl", "octo", "hello", "README.md", "--raw"],
        env={"GITHUB_TOKEN": "real-secret"},
    )
    assert result.exit_code == 0, result.output
    assert "real-secret" not in result.output
    assert '-H "Authorization: Bearer $GITHUB_TOKEN"' in result.output
    assert '-H "Accept: application/vnd.github.v3.raw"' in result.output
    assert f'"{API}/repos/octo/hello/contents/README.md?ref=main"' in result.output
