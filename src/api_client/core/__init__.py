"""
Core request building and execution for api_client.
"""
from .executor import RequestExecutor
from .request_builder import (
    RequestBuilder,
    append_query,
    build_body,
    is_absolute_url,
    resolve_url,
)

__all__ = [
    "RequestBuilder",
    "RequestExecutor",
    "append_query",
    "build_body",
    "is_absolute_url",
    "resolve_url",
]
