"""Render HTTP request descriptions as curl command lines."""

from .curl import to_curl
from .models import FormFile, JsonBody, MultipartBody, Request, request

__all__ = ["Request", "JsonBody", "MultipartBody", "FormFile", "request", "to_curl"]
