import json

from curlify import FormFile, Request


def test_to_httpx_defaults_to_get():
    built = Request(url="https://example.com/a", headers={"X-A": "1"}).to_httpx()
    assert built.method == "GET"
    assert str(built.url) == "https://example.com/a"
    assert built.headers["X-A"] == "1"


def test_to_httpx_json_body():
    built = Request(url="https://example.com", method="POST").with_json({"a": 1}).to_httpx()
    assert built.headers["Content-Type"] == "application/json"
    assert json.loads(built.read()) == {"a": 1}


def test_to_httpx_multipart_reads_files(tmp_path):
    upload = tmp_path / "x.txt"
    upload.write_bytes(b"payload")
    req = Request(
        url="https://example.com/upload",
        method="POST",
        headers={"Content-Type": "application/json"},
    ).with_multipart({"name": "value", "file": FormFile(path=str(upload), type="text/plain", filename="y.txt")})

    built = req.to_httpx()
    body = built.read()
    assert built.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'name="name"' in body
    assert b"value" in body
    assert b'filename="y.txt"' in body
    assert b"payload" in body


def test_with_headers_appends_in_order():
    req = Request(url="https://example.com", headers={"A": "1"}).with_headers({"B": "2"}, C="3")
    assert list(req.headers) == ["A", "B", "C"]
