"""Request to curl command serializer."""

import json
import logging

from .models import FormFile, MultipartBody, Request

logger = logging.getLogger(__name__)

CONTINUATION = " \\\n  "


def _form_value(name: str, value: FormFile | str | int | float) -> str:
    if isinstance(value, FormFile):
        form = f"{name}=@{value.path}"
        if value.type:
            form += f";type={value.type}"
        if value.filename:
            form += f";filename={value.filename}"
        return form
    return f"{name}={value}"


def to_curl(req: Request) -> str:
    """
    Convert a request description to a curl command.

    Header and form field values are interpolated as-is; embedded quotes
    are not escaped.

    Args:
        req: Request to render

    Returns:
        Shell command using backslash-newline continuations, e.g.::

            curl -X POST \\
              -H "Content-Type: application/json" \\
              -d '{"a":1,"b":2}' \\
              "https://httpbin.org/post"
    """
    parts = [f"curl -X {req.method or 'GET'}"]
    multipart = req.is_multipart

    for name, value in req.headers.items():
        if multipart and name.lower() == "content-type":
            # curl computes the boundary header itself
            logger.debug("Dropping Content-Type header for multipart body")
            continue
        parts.append(f'-H "{name}: {value}"')

    if isinstance(req.body, MultipartBody):
        for name, value in req.body.fields.items():
            parts.append(f'-F "{_form_value(name, value)}"')
    elif req.has_body:
        body_json = json.dumps(req.body.data, separators=(",", ":"), ensure_ascii=False)
        parts.append(f"-d '{body_json}'")

    parts.append(f'"{req.url}"')
    return CONTINUATION.join(parts)
