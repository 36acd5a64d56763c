"""Parse a cURL command into a RequestConfig."""

import logging

from curl_interchange.errors import CurlInterchangeError
from curl_interchange.parser.assembler import assemble
from curl_interchange.parser.base import ParseIssue, ParseResult
from curl_interchange.parser.flags import interpret
from curl_interchange.parser.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_curl(command: str) -> ParseResult:
    """Parse a cURL command.

    Never raises for malformed input: tokenizer and flag errors come back
    as a failed result, unsupported flags as warnings on either outcome.
    """
    try:
        tokens = tokenize(command)
        logger.debug("tokenized command into %d tokens", len(tokens))
        record = interpret(tokens)
    except CurlInterchangeError as exc:
        logger.debug("parse failed: %s", exc)
        return ParseResult(errors=[ParseIssue(kind=exc.kind, message=exc.message, position=exc.position)])

    return ParseResult(request=assemble(record), warnings=record.warnings)
