"""Content-Type resolution for request bodies.

Decides which Content-Type header a body variant implies, without
overriding a value the user set on purpose, and merges that decision into
a header list for the transport layer.
"""

from typing import assert_never

from curl_interchange.parser.base import (
    BinaryBody,
    ContentTypeHint,
    FormDataBody,
    GraphQLBody,
    KeyValuePair,
    NoBody,
    RawBody,
    RequestBodyConfig,
    RequestConfig,
    UrlEncodedBody,
)

RAW_CONTENT_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "html": "text/html",
    "javascript": "application/javascript",
    "css": "text/css",
    "text": "text/plain",
}


def resolve_content_type(body: RequestBodyConfig, headers: list[KeyValuePair]) -> ContentTypeHint:
    """Work out the Content-Type change a body needs given the current headers."""
    # Multipart boundaries are generated by the transport, so any static value goes.
    if isinstance(body, FormDataBody):
        return ContentTypeHint(remove_content_type=True)

    if _has_explicit_content_type(headers):
        return ContentTypeHint()

    if isinstance(body, NoBody):
        return ContentTypeHint()
    if isinstance(body, RawBody):
        return ContentTypeHint(content_type_override=RAW_CONTENT_TYPES.get(body.language, "text/plain"))
    if isinstance(body, UrlEncodedBody):
        return ContentTypeHint(content_type_override="application/x-www-form-urlencoded")
    if isinstance(body, BinaryBody):
        return ContentTypeHint(content_type_override=body.content_type or None)
    if isinstance(body, GraphQLBody):
        return ContentTypeHint(content_type_override="application/json")
    assert_never(body)


def merge_content_type(headers: list[KeyValuePair], hint: ContentTypeHint) -> list[KeyValuePair]:
    """Apply a ContentTypeHint to a header list, returning a new list."""
    merged = list(headers)

    if hint.remove_content_type:
        return [h for h in merged if h.key.lower() != "content-type"]

    if hint.content_type_override:
        replacement = KeyValuePair(key="Content-Type", value=hint.content_type_override)
        for index, header in enumerate(merged):
            if header.key.lower() == "content-type":
                if not header.enabled or not header.value.strip():
                    merged[index] = replacement
                return merged
        merged.append(replacement)

    return merged


def header_entries(headers: dict[str, str]) -> list[KeyValuePair]:
    return [KeyValuePair(key=k, value=v) for k, v in headers.items()]


def headers_for_transport(request: RequestConfig) -> dict[str, str]:
    """Return the enabled headers a request should be sent with."""
    entries = header_entries(request.headers)
    merged = merge_content_type(entries, resolve_content_type(request.body, entries))
    return {h.key: h.value for h in merged if h.enabled}


def _has_explicit_content_type(headers: list[KeyValuePair]) -> bool:
    return any(h.enabled and h.key.lower() == "content-type" and h.value.strip() for h in headers)
