"""Request assembler: turns a ParseRecord into a RequestConfig.

Total over any record the interpreter produces: ambiguous input degrades
to the most specific classification, never to an error.
"""

import json
import logging
import re
from urllib.parse import parse_qsl

from curl_interchange.parser.base import (
    AuthConfig,
    BasicAuth,
    BearerAuth,
    FormDataBody,
    KeyValuePair,
    NoAuth,
    NoBody,
    RawBody,
    RawLanguage,
    RequestBodyConfig,
    RequestConfig,
    RequestOptions,
    UrlEncodedBody,
)
from curl_interchange.parser.flags import ParseRecord

logger = logging.getLogger(__name__)

BEARER_RE = re.compile(r"^(bearer|token)\s+(.+)$", re.IGNORECASE | re.DOTALL)

FORM_URLENCODED = "application/x-www-form-urlencoded"


def assemble(record: ParseRecord) -> RequestConfig:
    """Build the canonical request from an interpreted record."""
    headers = dict(record.headers)
    auth = _assemble_auth(record, headers)
    body = _assemble_body(record, headers)

    return RequestConfig(
        url=record.url or "",
        method=record.effective_method,
        headers=headers,
        auth=auth,
        body=body,
        options=RequestOptions(**record.options),
    )


def _assemble_auth(record: ParseRecord, headers: dict[str, str]) -> AuthConfig:
    if record.user is not None:
        username, password = record.user
        return BasicAuth(username=username, password=password)

    name = find_header(headers, "Authorization")
    if name is not None:
        match = BEARER_RE.match(headers[name])
        if match:
            # The bearer arm owns the header from here on.
            del headers[name]
            return BearerAuth(prefix=match.group(1), token=match.group(2))

    # Authorization: Basic stays a plain header, it is not decoded.
    return NoAuth()


def _assemble_body(record: ParseRecord, headers: dict[str, str]) -> RequestBodyConfig:
    if record.form:
        return FormDataBody(fields=list(record.form))
    if not record.data:
        return NoBody()

    name = find_header(headers, "Content-Type")
    return classify_payload("&".join(record.data), headers[name] if name is not None else None)


def classify_payload(payload: str, content_type: str | None) -> RequestBodyConfig:
    """Classify joined ``-d`` data by its Content-Type, sniffing JSON without one."""
    media_type = _media_type(content_type) if content_type is not None else ""

    if media_type == FORM_URLENCODED:
        pairs = parse_qsl(payload, keep_blank_values=True)
        return UrlEncodedBody(pairs=[KeyValuePair(key=k, value=v) for k, v in pairs])

    if media_type:
        language = language_for_media_type(media_type)
    else:
        language = "json" if _looks_like_json(payload) else "text"
    logger.debug("classified body as raw/%s", language)
    return RawBody(content=payload, language=language)


def language_for_media_type(media_type: str) -> RawLanguage:
    """Map a Content-Type media type onto a raw body language."""
    media_type = _media_type(media_type)
    if "json" in media_type:
        return "json"
    if "xml" in media_type:
        return "xml"
    if media_type == "text/html":
        return "html"
    if "javascript" in media_type or "ecmascript" in media_type:
        return "javascript"
    if media_type == "text/css":
        return "css"
    return "text"


def _looks_like_json(payload: str) -> bool:
    try:
        value = json.loads(payload)
    except (ValueError, RecursionError):
        return False
    return isinstance(value, (dict, list))


def _media_type(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def find_header(headers: dict[str, str], name: str) -> str | None:
    """Return the stored spelling of a header name, matched case-insensitively."""
    for key in headers:
        if key.lower() == name.lower():
            return key
    return None
