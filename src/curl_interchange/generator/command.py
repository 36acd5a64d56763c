"""Command generator: renders a RequestConfig as a cURL command.

The output re-parses to the same RequestConfig whenever the result carries
no FidelityWarning. Anything cURL cannot express, or that the parser would
read back differently, is approximated and reported through those warnings.
"""

import json
import logging
import re
from typing import Callable, assert_never
from urllib.parse import quote

from curl_interchange.parser.assembler import BEARER_RE, classify_payload, find_header
from curl_interchange.parser.base import (
    ApiKeyAuth,
    AuthConfig,
    AwsAuth,
    BasicAuth,
    BearerAuth,
    BinaryBody,
    FidelityWarning,
    FormDataBody,
    GenerateResult,
    GraphQLBody,
    NoAuth,
    NoBody,
    OAuth2Auth,
    RawBody,
    RequestBodyConfig,
    RequestConfig,
    RequestOptions,
    UrlEncodedBody,
)

logger = logging.getLogger(__name__)

DOUBLE_QUOTE_SPECIALS = re.compile(r'([\\"$`])')


def double_quote(value: str) -> str:
    """Quote a value for a POSIX shell using double quotes."""
    return '"' + DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", value) + '"'


def quote_payload(value: str) -> str:
    """Single-quote a payload when possible, double-quote it otherwise."""
    if "'" not in value:
        return f"'{value}'"
    return double_quote(value)


def generate_curl(request: RequestConfig) -> GenerateResult:
    """Generate a cURL command for a request."""
    warnings: list[FidelityWarning] = []

    header_parts = _header_flags(request.headers, request.auth, warnings)
    auth_parts, url = _auth_flags(request.auth, request.url, warnings)
    body_parts = _body_flags(request.body, request.headers, warnings)

    parts = ["curl"]
    # Data flags make a re-parse infer POST, so GET must then be explicit.
    if request.method != "GET" or body_parts:
        parts += ["-X", request.method]
    parts.append(double_quote(url))
    parts += header_parts
    parts += auth_parts
    parts += body_parts
    parts += _option_flags(request.options)

    for warning in warnings:
        logger.debug("fidelity warning (%s/%s): %s", warning.subject, warning.variant, warning.message)
    return GenerateResult(command=" ".join(parts), warnings=warnings)


def to_curl(request: RequestConfig) -> str:
    """Shortcut for ``generate_curl(request).command``."""
    return generate_curl(request).command


def _header_flags(headers: dict[str, str], auth: AuthConfig, warnings: list[FidelityWarning]) -> list[str]:
    """Render ``-H`` flags, minding the Authorization header the parser lifts into bearer auth."""
    def warn(message: str) -> None:
        warnings.append(FidelityWarning(subject="auth", variant=auth.type, message=message))

    # These arms write their own Authorization header after the plain ones.
    owns_authorization = isinstance(auth, BearerAuth) or (isinstance(auth, OAuth2Auth) and bool(auth.access_token))

    parts = []
    for name, value in headers.items():
        if name.lower() == "authorization":
            if owns_authorization:
                warn(f"Authorization header {value!r} is replaced by the {auth.type} Authorization header")
                continue
            if isinstance(auth, NoAuth) and BEARER_RE.match(value):
                warn("Authorization header re-parses as bearer auth")
        parts += ["-H", double_quote(f"{name}: {value}")]
    return parts


def _auth_flags(auth: AuthConfig, url: str, warnings: list[FidelityWarning]) -> tuple[list[str], str]:
    def warn(message: str) -> None:
        warnings.append(FidelityWarning(subject="auth", variant=auth.type, message=message))

    if isinstance(auth, NoAuth):
        return [], url

    if isinstance(auth, BasicAuth):
        if ":" in auth.username:
            warn("username contains ':' and will be split differently when re-parsed")
        return ["-u", double_quote(f"{auth.username}:{auth.password}")], url

    if isinstance(auth, BearerAuth):
        value = f"{auth.prefix} {auth.token}" if auth.prefix else auth.token
        if not BEARER_RE.match(value):
            warn(f"Authorization header {value!r} will re-parse as a plain header")
        return ["-H", double_quote(f"Authorization: {value}")], url

    if isinstance(auth, ApiKeyAuth):
        if auth.add_to == "query":
            warn("API key is appended to the URL and re-parses as part of it")
            separator = "&" if "?" in url else "?"
            return [], f"{url}{separator}{quote(auth.key, safe='')}={quote(auth.value, safe='')}"
        warn("API key is sent as a header and re-parses as a plain header")
        return ["-H", double_quote(f"{auth.key}: {auth.value}")], url

    if isinstance(auth, OAuth2Auth):
        if auth.access_token:
            warn("OAuth 2.0 has no cURL form; only the current access token is sent")
            return ["-H", double_quote(f"Authorization: Bearer {auth.access_token}")], url
        warn("OAuth 2.0 has no cURL form and no access token was fetched yet")
        return [], url

    if isinstance(auth, AwsAuth):
        warn("AWS Signature v4 is delegated to curl --aws-sigv4 and does not re-parse")
        parts = [
            "--aws-sigv4", double_quote(f"aws:amz:{auth.region}:{auth.service}"),
            "-u", double_quote(f"{auth.access_key}:{auth.secret_key}"),
        ]
        if auth.session_token:
            parts += ["-H", double_quote(f"x-amz-security-token: {auth.session_token}")]
        return parts, url

    assert_never(auth)


def _body_flags(body: RequestBodyConfig, headers: dict[str, str], warnings: list[FidelityWarning]) -> list[str]:
    def warn(message: str) -> None:
        warnings.append(FidelityWarning(subject="body", variant=body.type, message=message))

    if isinstance(body, NoBody):
        return []

    if isinstance(body, RawBody):
        _check_classification(body, body.content, headers, warn)
        return ["-d", quote_payload(body.content)]

    if isinstance(body, UrlEncodedBody):
        enabled = [p for p in body.pairs if p.enabled]
        if len(enabled) != len(body.pairs):
            warn("disabled pairs are left out")
        payload = "&".join(f"{quote(p.key, safe='')}={quote(p.value, safe='')}" for p in enabled)
        _check_classification(UrlEncodedBody(pairs=enabled), payload, headers, warn)
        return ["-d", quote_payload(payload)]

    if isinstance(body, FormDataBody):
        enabled = [f for f in body.fields if f.enabled]
        if len(enabled) != len(body.fields):
            warn("disabled fields are left out")
        if not enabled:
            warn("no enabled form fields, the command carries no body")
        parts = []
        for f in enabled:
            if "=" in f.key:
                warn(f"field name {f.key!r} contains '=' and is split differently when re-parsed")
            if f.type == "file":
                if not f.file_path:
                    warn(f"file field {f.key!r} has no file path")
                if f.value:
                    warn(f"value of file field {f.key!r} is not sent")
                parts += ["-F", quote_payload(f"{f.key}=@{f.file_path or ''}")]
                continue
            if f.file_path is not None:
                warn(f"file path of text field {f.key!r} is not sent")
            if f.value.startswith("@"):
                parts += ["--form-string", quote_payload(f"{f.key}={f.value}")]
            else:
                parts += ["-F", quote_payload(f"{f.key}={f.value}")]
        return parts

    if isinstance(body, BinaryBody):
        warn("binary body is sent with --data-binary @file and re-parses as raw text")
        if not body.file_path:
            return []
        return ["--data-binary", quote_payload(f"@{body.file_path}")]

    if isinstance(body, GraphQLBody):
        warn("GraphQL body is sent as a JSON payload and re-parses as raw JSON")
        return ["-d", quote_payload(_graphql_payload(body, warn))]

    assert_never(body)


def _check_classification(
    expected: RequestBodyConfig,
    payload: str,
    headers: dict[str, str],
    warn: Callable[[str], None],
) -> None:
    """Warn when a ``-d`` payload will be classified as another body on re-parse."""
    name = find_header(headers, "Content-Type")
    content_type = headers[name] if name is not None else None
    reparsed = classify_payload(payload, content_type)
    if reparsed == expected:
        return
    label = f"raw/{reparsed.language}" if isinstance(reparsed, RawBody) else reparsed.type
    if content_type is None:
        warn(f"payload re-parses as a {label} body without a Content-Type header")
    else:
        warn(f"payload re-parses as a {label} body under Content-Type {content_type!r}")


def _graphql_payload(body: GraphQLBody, warn: Callable[[str], None]) -> str:
    variables: object = {}
    if body.variables.strip():
        try:
            variables = json.loads(body.variables)
        except ValueError:
            warn("variables are not valid JSON and are sent as a string")
            variables = body.variables
    payload = {"query": body.query, "variables": variables}
    if body.operation_name:
        payload["operationName"] = body.operation_name
    return json.dumps(payload)


def _option_flags(options: RequestOptions) -> list[str]:
    parts = []
    if options.compressed:
        parts.append("--compressed")
    if options.insecure:
        parts.append("-k")
    if options.follow_redirects:
        parts.append("-L")
    if options.include_headers:
        parts.append("-i")
    if options.silent:
        parts.append("-s")
    if options.verbose:
        parts.append("-v")
    if options.timeout is not None:
        parts += ["--max-time", _format_seconds(options.timeout)]
    if options.max_redirects is not None:
        parts += ["--max-redirs", str(options.max_redirects)]
    if options.cookies:
        parts += ["-b", double_quote(options.cookies)]
    return parts


def _format_seconds(seconds: float) -> str:
    return str(int(seconds)) if seconds.is_integer() else repr(seconds)
