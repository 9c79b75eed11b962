from __future__ import annotations

"""
Properties File Codec.

Reads the line-oriented 'key=value' format used by runner and project
settings files. Supports comments ('#' and '!'), the '=', ':' and
whitespace separators, backslash line continuations and the usual escape
sequences, including '\\uXXXX'.
"""

import logging
import os
import re
from typing import Dict, Iterator, Optional, Tuple

from sonar_runner.domain.errors import RunnerError

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK_RX = re.compile(r"\r\n|\r|\n")
_ESCAPE_RX = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES: Dict[str, str] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_FALLBACK_ENCODING = "iso-8859-1"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_properties(path: str, encoding: str = "utf-8") -> Dict[str, str]:
    """
    Read a properties file from disk.

    Files that are not valid in the given encoding are decoded as
    ISO-8859-1, the historical encoding of the format.

    Args:
        path: Target file.
        encoding: Preferred text encoding of the file.

    Returns:
        Dict[str, str]: Parsed entries; later duplicates win.

    Raises:
        RunnerError: If the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise RunnerError(
            f"Impossible to read the property file: {os.path.abspath(path)}"
        ) from e

    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError:
        logger.debug(f"{path} is not valid {encoding}, reading it as {_FALLBACK_ENCODING}")
        text = raw.decode(_FALLBACK_ENCODING)

    props = parse_properties(text)
    logger.debug(f"Loaded {len(props)} properties from {path}")
    return props


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse the content of a properties file.

    Args:
        text: Raw file content.

    Returns:
        Dict[str, str]: Parsed entries; later duplicates win.
    """
    props: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        props[_unescape(key)] = _unescape(value)
    return props

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _logical_lines(text: str) -> Iterator[str]:
    """Join continued natural lines and drop blank and comment lines."""
    buffer: Optional[str] = None
    for raw in _LINE_BREAK_RX.split(text):
        line = raw.lstrip(_WHITESPACE)
        if buffer is None and (not line or line[0] in "#!"):
            continue

        continued = _count_trailing_backslashes(line) % 2 == 1
        if continued:
            line = line[:-1]

        buffer = line if buffer is None else buffer + line
        if not continued:
            yield buffer
            buffer = None

    if buffer is not None:
        yield buffer


def _count_trailing_backslashes(line: str) -> int:
    return len(line) - len(line.rstrip("\\"))


def _split_key_value(line: str) -> Tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    n = len(line)
    i = 0
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    i = min(i, n)
    key = line[:i]

    j = i
    while j < n and line[j] in _WHITESPACE:
        j += 1
    if j < n and line[j] in _SEPARATORS:
        j += 1
    while j < n and line[j] in _WHITESPACE:
        j += 1
    return key, line[j:]


def _unescape(s: str) -> str:
    def repl(m: re.Match) -> str:
        token = m.group(1)
        if len(token) == 5:
            return chr(int(token[1:], 16))
        return _SIMPLE_ESCAPES.get(token, token)

    return _ESCAPE_RX.sub(repl, s)
