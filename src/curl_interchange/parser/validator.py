"""Cheap structural pre-check of a raw cURL command.

Runs before ``parse_curl`` to reject obviously broken input early. Returns
human-readable problems; an empty list means the command is worth parsing.
"""

import re

from curl_interchange.errors import TokenizeError
from curl_interchange.parser.base import HTTP_METHODS
from curl_interchange.parser.flags import HEAD_FLAGS, TOGGLE_FLAGS, UNMODELLED_VALUE_FLAGS, VALUE_FLAGS
from curl_interchange.parser.tokenizer import tokenize

URL_PATTERNS = (
    re.compile(r"^https?://\S+$", re.IGNORECASE),
    re.compile(r"^[\w.-]+\.[\w.-]+(:\d+)?(/.*)?$"),
    re.compile(r"^localhost(:\d+)?(/.*)?$", re.IGNORECASE),
    re.compile(r"^(\d{1,3}\.){3}\d{1,3}(:\d+)?(/.*)?$"),
)


def validate_curl(command: str) -> list[str]:
    """Return the structural problems of a cURL command."""
    stripped = command.strip()
    if not stripped:
        return ["cURL command cannot be empty"]

    problems = []
    first_word = stripped.split(None, 1)[0]
    if first_word.lower() != "curl" and not is_known_flag(first_word):
        problems.append('command must start with "curl" or an option')

    try:
        words = [t.value for t in tokenize(command)]
    except TokenizeError as exc:
        problems.append(f"unterminated {exc.quote} quote at position {exc.position}")
        # Fall back to whitespace splitting so the other checks still run.
        words = stripped.split()

    if not any(looks_like_url(w) for w in words[1:] if not w.startswith("-")):
        problems.append("no URL found in command")

    for method in _methods(words):
        if method.upper() not in HTTP_METHODS:
            problems.append(f"unrecognized HTTP method {method!r}")

    return problems


def looks_like_url(word: str) -> bool:
    return any(p.match(word) for p in URL_PATTERNS)


def is_known_flag(word: str) -> bool:
    """True for a cURL option the parser recognizes, in any accepted spelling."""
    if word in VALUE_FLAGS or word in TOGGLE_FLAGS or word in HEAD_FLAGS or word in UNMODELLED_VALUE_FLAGS:
        return True
    if word.startswith("--") or len(word) < 2 or not word.startswith("-"):
        return False
    # -XPOST style attached values and -sLk style toggle clusters.
    return word[:2] in VALUE_FLAGS or all(f"-{c}" in TOGGLE_FLAGS or f"-{c}" in HEAD_FLAGS for c in word[1:])


def _methods(words: list[str]) -> list[str]:
    methods = []
    for i, word in enumerate(words):
        if word in ("-X", "--request"):
            if i + 1 < len(words):
                methods.append(words[i + 1])
        elif word.startswith("-X"):
            methods.append(word[2:])
    return methods
