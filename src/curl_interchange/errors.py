"""Exception taxonomy for the cURL interchange engine.

The tokenizer and flag interpreter raise these; ``parse_curl`` converts
them into a failed ``ParseResult`` so callers never see a raw exception.
"""


class CurlInterchangeError(Exception):
    """Base class for every error raised while reading a cURL command."""

    kind = "Error"

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position


class TokenizeError(CurlInterchangeError):
    """A quote was opened but never closed."""

    kind = "UnterminatedQuote"

    def __init__(self, quote: str, position: int):
        super().__init__(f"unterminated {quote} quote at position {position}", position)
        self.quote = quote


class ParseError(CurlInterchangeError):
    """The token stream does not describe a usable request."""

    def __init__(self, kind: str, message: str, position: int | None = None):
        super().__init__(message, position)
        self.kind = kind


MISSING_URL = "MissingUrl"
MULTIPLE_URLS = "MultipleUrls"
MISSING_ARGUMENT = "MissingArgument"
INVALID_METHOD = "InvalidMethod"
INVALID_ARGUMENT = "InvalidArgument"

UNSUPPORTED_FLAG = "UnsupportedFlag"
MALFORMED_HEADER = "MalformedHeader"
IGNORED_DATA = "IgnoredData"
