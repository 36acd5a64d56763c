"""Bidirectional translation between cURL commands and structured requests."""

from curl_interchange.auth import validate_auth
from curl_interchange.generator.command import generate_curl, to_curl
from curl_interchange.generator.content_type import (
    headers_for_transport,
    merge_content_type,
    resolve_content_type,
)
from curl_interchange.parser.base import (
    ContentTypeHint,
    GenerateResult,
    ParseResult,
    RequestConfig,
)
from curl_interchange.parser.curl import parse_curl
from curl_interchange.parser.validator import validate_curl

__version__ = "0.1.0"

__all__ = [
    "ContentTypeHint",
    "GenerateResult",
    "ParseResult",
    "RequestConfig",
    "generate_curl",
    "headers_for_transport",
    "merge_content_type",
    "parse_curl",
    "resolve_content_type",
    "to_curl",
    "validate_auth",
    "validate_curl",
]
