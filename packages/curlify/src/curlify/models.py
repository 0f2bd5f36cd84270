"""HTTP request description models."""

from pathlib import Path
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, Field


class FormFile(BaseModel):
    """Multipart field that uploads a local file."""

    path: str
    type: str | None = None  # MIME type
    filename: str | None = None  # Name reported to the server


class JsonBody(BaseModel):
    """Body sent as JSON."""

    kind: Literal["json"] = "json"
    data: Any


class MultipartBody(BaseModel):
    """Body sent as multipart/form-data."""

    kind: Literal["multipart"] = "multipart"
    fields: dict[str, FormFile | str | int | float] = Field(default_factory=dict)


Body = Annotated[JsonBody | MultipartBody, Field(discriminator="kind")]


class Request(BaseModel):
    """HTTP request prior to execution."""

    url: str
    method: str | None = None  # None means GET
    headers: dict[str, str] = Field(default_factory=dict)
    body: Body | None = None

    @property
    def has_body(self) -> bool:
        """A JSON body holding null counts as no body."""
        if isinstance(self.body, JsonBody):
            return self.body.data is not None
        return self.body is not None

    @property
    def is_multipart(self) -> bool:
        return self.body is not None and self.body.kind == "multipart"

    def with_method(self, method: str) -> "Request":
        return self.model_copy(update={"method": method.upper()})

    def with_headers(self, headers: dict[str, str] | None = None, **kwargs: str) -> "Request":
        """Return a copy with headers added after the existing ones."""
        merged = dict(self.headers)
        merged.update(headers or {})
        merged.update(kwargs)
        return self.model_copy(update={"headers": merged})

    def with_json(self, data: Any) -> "Request":
        return self.model_copy(update={"body": JsonBody(data=data)})

    def with_multipart(self, fields: dict[str, Any]) -> "Request":
        return self.model_copy(update={"body": MultipartBody(fields=fields)})

    def to_httpx(self) -> httpx.Request:
        """
        Build the equivalent httpx request.

        File fields are read from their local paths. For multipart bodies a
        Content-Type header is dropped so httpx can set the boundary.

        Returns:
            httpx.Request ready to be sent
        """
        method = self.method or "GET"
        if not self.has_body:
            return httpx.Request(method, self.url, headers=self.headers)

        if isinstance(self.body, JsonBody):
            return httpx.Request(method, self.url, headers=self.headers, json=self.body.data)

        headers = {k: v for k, v in self.headers.items() if k.lower() != "content-type"}
        # Plain values go in as filename-less parts so field order is kept
        # and the body stays multipart even without file fields.
        parts: list[tuple[str, tuple[str | None, bytes, str | None]]] = []
        for name, value in self.body.fields.items():
            if isinstance(value, FormFile):
                local = Path(value.path)
                parts.append((name, (value.filename or local.name, local.read_bytes(), value.type)))
            else:
                parts.append((name, (None, str(value).encode("utf-8"), None)))
        return httpx.Request(method, self.url, headers=headers, files=parts)


def request(url: str) -> Request:
    """Start a request description for ``url``."""
    return Request(url=url)
