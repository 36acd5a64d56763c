"""Shell-aware tokenizer for cURL command lines.

Implements the subset of POSIX word splitting a pasted cURL command needs:
single quotes, double quotes with backslash escapes, bare backslash escapes,
line continuations and fragment concatenation. No expansion of any kind.
"""

from curl_interchange.errors import TokenizeError
from curl_interchange.parser.base import QuoteStyle, Token

WHITESPACE = " \t\r\n"

# Characters a backslash escapes inside double quotes.
DOUBLE_QUOTE_ESCAPES = '"\\`$'


def tokenize(text: str) -> list[Token]:
    """Split a command line into tokens.

    Raises:
        TokenizeError: If a single or double quote is never closed.
    """
    tokens: list[Token] = []
    buf: list[str] = []
    in_token = False
    quote: QuoteStyle | None = None
    start = 0
    i = 0
    n = len(text)

    def flush() -> None:
        nonlocal in_token, quote
        tokens.append(Token(value="".join(buf), quote=quote or "unquoted", position=start))
        buf.clear()
        in_token = False
        quote = None

    while i < n:
        ch = text[i]

        if ch == "\\" and _continuation_length(text, i + 1):
            # Line continuation is removed; the surrounding whitespace splits words.
            i += 1 + _continuation_length(text, i + 1)
            continue

        if ch in WHITESPACE:
            if in_token:
                flush()
            i += 1
            continue

        if not in_token:
            in_token = True
            start = i

        if ch == "'":
            end = text.find("'", i + 1)
            if end == -1:
                raise TokenizeError("'", i)
            buf.append(text[i + 1 : end])
            quote = quote or "single"
            i = end + 1
        elif ch == '"':
            i = _read_double_quoted(text, i, buf)
            quote = quote or "double"
        elif ch == "\\":
            if i + 1 < n:
                buf.append(text[i + 1])
                i += 2
            else:
                buf.append("\\")
                i += 1
        else:
            buf.append(ch)
            i += 1

    if in_token:
        flush()
    return tokens


def _read_double_quoted(text: str, opening: int, buf: list[str]) -> int:
    """Append the unescaped content of a double-quoted fragment.

    Returns the index just past the closing quote.
    """
    j = opening + 1
    n = len(text)
    while j < n:
        c = text[j]
        if c == "\\" and j + 1 < n:
            nxt = text[j + 1]
            if nxt in DOUBLE_QUOTE_ESCAPES:
                buf.append(nxt)
                j += 2
                continue
            skip = _continuation_length(text, j + 1)
            if skip:
                j += 1 + skip
                continue
        if c == '"':
            return j + 1
        buf.append(c)
        j += 1
    raise TokenizeError('"', opening)


def _continuation_length(text: str, i: int) -> int:
    if text.startswith("\r\n", i):
        return 2
    if text.startswith("\n", i):
        return 1
    return 0
