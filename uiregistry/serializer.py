"""Escaping for component source embedded in a backtick template literal."""

from __future__ import annotations

_ESCAPE_CHAR = "\\"
_DELIMITER = "`"
_SUBSTITUTION_OPEN = "${"
_ESCAPABLE = {_ESCAPE_CHAR, _DELIMITER, "$"}


def escape_source(text: str) -> str:
    """Escape ``text`` so it can be placed between backticks verbatim.

    Order matters: the escape character is doubled first so the escapes added
    for the delimiter and the substitution opener are not themselves escaped.
    """
    escaped = text.replace(_ESCAPE_CHAR, _ESCAPE_CHAR * 2)
    escaped = escaped.replace(_DELIMITER, _ESCAPE_CHAR + _DELIMITER)
    return escaped.replace(_SUBSTITUTION_OPEN, _ESCAPE_CHAR + _SUBSTITUTION_OPEN)


def unescape_source(text: str) -> str:
    """Invert :func:`escape_source` exactly."""
    if _ESCAPE_CHAR not in text:
        return text

    parts: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == _ESCAPE_CHAR and index + 1 < length and text[index + 1] in _ESCAPABLE:
            parts.append(text[index + 1])
            index += 2
            continue
        parts.append(char)
        index += 1
    return "".join(parts)


__all__ = ["escape_source", "unescape_source"]
