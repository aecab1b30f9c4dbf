"""JSON-with-comments support.

``normalize`` turns JSONC text (``//`` and ``/* */`` comments, trailing commas
before ``}`` or ``]``) into strict JSON. Both passes track string literals so
comment markers and ``,}`` sequences inside strings are left alone.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Optional

from gitinfo.errors import ParseFailure

logger = logging.getLogger(__name__)

QUOTES = "\"'"
JSON_WHITESPACE = " \t\r\n"
CLOSERS = "}]"


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal whose opening quote is at ``start``."""
    quote = text[start]
    i, n = start + 1, len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            # escape pair is copied as a unit
            i += 2
            continue
        i += 1
        if ch == quote:
            break
    return min(i, n)


def strip_comments(text: str) -> str:
    out = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue
        if text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def strip_trailing_commas(text: str) -> str:
    out = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue
        if ch == ",":
            j = i + 1
            while j < n and text[j] in JSON_WHITESPACE:
                j += 1
            if j < n and text[j] in CLOSERS:
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def normalize(text: str) -> str:
    return strip_trailing_commas(strip_comments(text))


def loads(text: str, source: Optional[str] = None) -> Any:
    """Normalize ``text`` and parse it, raising ``ParseFailure`` on bad JSON."""
    normalized = normalize(text)
    logger.debug("normalized %s: %d -> %d chars", source or "<string>", len(text), len(normalized))
    try:
        return json.loads(normalized)
    except json.JSONDecodeError as e:
        raise ParseFailure(
            f"Error parsing JSONC: {e.msg} (line {e.lineno}, column {e.colno})", source
        ) from e
    except (ValueError, RecursionError) as e:
        # over-long integer literals, nesting deeper than the recursion limit
        raise ParseFailure(f"Error parsing JSONC: {e}", source) from e
