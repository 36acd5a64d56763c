"""cURL flag interpreter.

Walks the token stream once and accumulates a ``ParseRecord``. The record
is owned by a single ``interpret`` call and handed to the assembler.
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from curl_interchange import errors
from curl_interchange.errors import ParseError
from curl_interchange.parser.base import HTTP_METHODS, FormField, ParseIssue, Token

logger = logging.getLogger(__name__)

# Flags that consume the next token, mapped to their handler name.
VALUE_FLAGS = {
    "-X": "request",
    "--request": "request",
    "-H": "header",
    "--header": "header",
    "-d": "data",
    "--data": "data",
    "--data-raw": "data",
    "--data-ascii": "data",
    "--data-binary": "data",
    "--data-urlencode": "data_urlencode",
    "--json": "json",
    "-F": "form",
    "--form": "form",
    "--form-string": "form_string",
    "-u": "user",
    "--user": "user",
    "-A": "user_agent",
    "--user-agent": "user_agent",
    "-e": "referer",
    "--referer": "referer",
    "-b": "cookie",
    "--cookie": "cookie",
    "--url": "url",
    "-m": "max_time",
    "--max-time": "max_time",
    "--max-redirs": "max_redirs",
}

# Argument-free flags, mapped to the RequestOptions field they switch on.
TOGGLE_FLAGS = {
    "--compressed": "compressed",
    "-k": "insecure",
    "--insecure": "insecure",
    "-L": "follow_redirects",
    "--location": "follow_redirects",
    "-i": "include_headers",
    "--include": "include_headers",
    "-s": "silent",
    "--silent": "silent",
    "-v": "verbose",
    "--verbose": "verbose",
}

HEAD_FLAGS = ("-I", "--head")

# cURL flags we do not model but know to take an argument, so the argument
# is not mistaken for the URL.
UNMODELLED_VALUE_FLAGS = frozenset({
    "-o", "--output", "-w", "--write-out", "-x", "--proxy", "-U", "--proxy-user",
    "-c", "--cookie-jar", "-T", "--upload-file", "-r", "--range", "-E", "--cert",
    "--cert-type", "--key", "--key-type", "--cacert", "--capath", "--connect-timeout",
    "--retry", "--retry-delay", "--retry-max-time", "--resolve", "--connect-to",
    "--interface", "--limit-rate", "-Y", "--speed-limit", "-y", "--speed-time",
    "--oauth2-bearer", "--aws-sigv4", "--unix-socket", "-K", "--config",
    "-D", "--dump-header", "--trace", "--trace-ascii", "-z", "--time-cond",
    "--proto", "--proto-redir", "--ciphers", "--tls-max", "--noproxy",
})


@dataclass
class ParseRecord:
    """Everything the flags said, before classification."""

    url: str | None = None
    method: str | None = None
    head: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    data: list[str] = field(default_factory=list)
    form: list[FormField] = field(default_factory=list)
    user: tuple[str, str] | None = None
    options: dict[str, Any] = field(default_factory=dict)
    warnings: list[ParseIssue] = field(default_factory=list)

    @property
    def effective_method(self) -> str:
        if self.method:
            return self.method
        if self.data or self.form:
            return "POST"
        if self.head:
            return "HEAD"
        return "GET"

    def set_header(self, name: str, value: str) -> None:
        """Set a header, overwriting any earlier one with the same name in any case."""
        for existing in self.headers:
            if existing.lower() == name.lower():
                self.headers[existing] = value
                return
        self.headers[name] = value

    def get_header(self, name: str) -> str | None:
        for existing, value in self.headers.items():
            if existing.lower() == name.lower():
                return value
        return None

    def warn(self, kind: str, message: str, position: int | None = None) -> None:
        logger.info("%s: %s", kind, message)
        self.warnings.append(ParseIssue(kind=kind, message=message, position=position))


def interpret(tokens: list[Token]) -> ParseRecord:
    """Interpret cURL flags into a ParseRecord.

    Raises:
        ParseError: On a missing argument, a bad method or number, a second
            URL, or no URL at all.
    """
    return _Interpreter(tokens).run()


class _Interpreter:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.record = ParseRecord()
        self.pos = 0

    def run(self) -> ParseRecord:
        if self.tokens and self.tokens[0].value.lower() == "curl":
            self.pos = 1

        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            self._dispatch(token)

        if self.record.url is None:
            raise ParseError(errors.MISSING_URL, "no URL found in command")
        if self.record.form and self.record.data:
            self.record.warn(errors.IGNORED_DATA, "-d data ignored because -F form fields were given")
        return self.record

    def _dispatch(self, token: Token) -> None:
        flag = token.value
        if not flag.startswith("-") or flag == "-":
            self._on_url(flag, token)
            return

        if flag in VALUE_FLAGS:
            self._apply(VALUE_FLAGS[flag], self._take_argument(token), token)
        elif flag in TOGGLE_FLAGS:
            self.record.options[TOGGLE_FLAGS[flag]] = True
        elif flag in HEAD_FLAGS:
            self.record.head = True
        elif not flag.startswith("--") and flag[:2] in VALUE_FLAGS:
            # Attached short value such as -XPOST.
            self._apply(VALUE_FLAGS[flag[:2]], flag[2:], token)
        elif not flag.startswith("--") and all(f"-{c}" in TOGGLE_FLAGS or f"-{c}" in HEAD_FLAGS for c in flag[1:]):
            for c in flag[1:]:
                self._dispatch(Token(value=f"-{c}", position=token.position))
        else:
            self._on_unknown(token)

    def _apply(self, handler: str, value: str, token: Token) -> None:
        logger.debug("flag %s -> %s", token.value, handler)
        if handler == "url":
            self._on_url(value, token)
        else:
            getattr(self, f"_on_{handler}")(value, token)

    def _take_argument(self, token: Token) -> str:
        if self.pos >= len(self.tokens):
            raise ParseError(
                errors.MISSING_ARGUMENT,
                f"option {token.value} requires an argument",
                token.position,
            )
        value = self.tokens[self.pos].value
        self.pos += 1
        return value

    def _on_unknown(self, token: Token) -> None:
        skipped = ""
        if token.value in UNMODELLED_VALUE_FLAGS and self.pos < len(self.tokens):
            skipped = f" (argument {self.tokens[self.pos].value!r} skipped)"
            self.pos += 1
        self.record.warn(
            errors.UNSUPPORTED_FLAG,
            f"unsupported option {token.value}{skipped}",
            token.position,
        )

    def _on_url(self, value: str, token: Token) -> None:
        if self.record.url is not None:
            raise ParseError(
                errors.MULTIPLE_URLS,
                f"more than one URL: {self.record.url!r} and {value!r}",
                token.position,
            )
        self.record.url = value

    def _on_request(self, value: str, token: Token) -> None:
        method = value.upper()
        if method not in HTTP_METHODS:
            raise ParseError(errors.INVALID_METHOD, f"unsupported HTTP method {value!r}", token.position)
        self.record.method = method

    def _on_header(self, value: str, token: Token) -> None:
        name, sep, rest = value.partition(":")
        if not sep or not name.strip():
            self.record.warn(errors.MALFORMED_HEADER, f"header {value!r} has no name: value form", token.position)
            return
        if rest.startswith(" "):
            rest = rest[1:]
        self.record.set_header(name.strip(), rest)

    def _on_data(self, value: str, token: Token) -> None:
        self.record.data.append(value)

    def _on_data_urlencode(self, value: str, token: Token) -> None:
        name, sep, content = value.partition("=")
        if not sep:
            self.record.data.append(quote(value, safe=""))
        elif not name:
            self.record.data.append(quote(content, safe=""))
        else:
            self.record.data.append(f"{name}={quote(content, safe='')}")

    def _on_json(self, value: str, token: Token) -> None:
        self.record.data.append(value)
        if self.record.get_header("Content-Type") is None:
            self.record.set_header("Content-Type", "application/json")
        if self.record.get_header("Accept") is None:
            self.record.set_header("Accept", "application/json")

    def _on_form(self, value: str, token: Token) -> None:
        key, _, rest = value.partition("=")
        if rest.startswith("@"):
            self.record.form.append(FormField(key=key, type="file", file_path=rest[1:]))
        else:
            self.record.form.append(FormField(key=key, value=rest))

    def _on_form_string(self, value: str, token: Token) -> None:
        key, _, rest = value.partition("=")
        self.record.form.append(FormField(key=key, value=rest))

    def _on_user(self, value: str, token: Token) -> None:
        username, _, password = value.partition(":")
        self.record.user = (username, password)

    def _on_user_agent(self, value: str, token: Token) -> None:
        self.record.set_header("User-Agent", value)

    def _on_referer(self, value: str, token: Token) -> None:
        self.record.set_header("Referer", value)

    def _on_cookie(self, value: str, token: Token) -> None:
        self.record.options["cookies"] = value

    def _on_max_time(self, value: str, token: Token) -> None:
        try:
            self.record.options["timeout"] = float(value)
        except ValueError:
            raise ParseError(errors.INVALID_ARGUMENT, f"{token.value} expects seconds, got {value!r}", token.position)

    def _on_max_redirs(self, value: str, token: Token) -> None:
        try:
            self.record.options["max_redirects"] = int(value)
        except ValueError:
            raise ParseError(errors.INVALID_ARGUMENT, f"{token.value} expects an integer, got {value!r}", token.position)
