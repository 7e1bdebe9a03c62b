"""Human-readable metadata extraction from component documentation blocks."""

from __future__ import annotations

import re
from typing import List, Optional

from ..naming import synthesize_description

DESCRIPTION_TAG = "@description"

_DOC_BLOCK_RE = re.compile(r"/\*\*.*?\*/", re.DOTALL)
_LEADING_STARS_RE = re.compile(r"^\*+")


def extract_description(source: str, slug: str) -> str:
    """Return a one-line description for the component defined by ``source``.

    The first ``/** ... */`` block wins. An ``@description`` line is preferred,
    then the first plain content line. Anything else falls back to a name
    synthesized from ``slug``.
    """
    block = find_doc_block(source)
    if block is not None:
        lines = doc_block_lines(block)
        tagged = _tagged_description(lines)
        if tagged:
            return tagged
        for line in lines:
            if not line:
                continue
            if not line.startswith("@"):
                return line
            break
    return synthesize_description(slug)


def find_doc_block(source: str) -> Optional[str]:
    match = _DOC_BLOCK_RE.search(source)
    return match.group(0) if match else None


def doc_block_lines(block: str) -> List[str]:
    """Split a doc block into content lines with comment decoration removed."""
    lines: List[str] = []
    for raw in block.splitlines():
        line = raw.strip()
        if line.startswith("/**"):
            line = line[3:]
        if line.endswith("*/"):
            line = line[:-2]
        line = _LEADING_STARS_RE.sub("", line.strip())
        lines.append(line.strip())
    return lines


def _tagged_description(lines: List[str]) -> Optional[str]:
    for line in lines:
        if not line.startswith(DESCRIPTION_TAG):
            continue
        remainder = line[len(DESCRIPTION_TAG):]
        # "@descriptionFoo" is some other tag, not a description.
        if remainder and not remainder[0].isspace():
            continue
        text = remainder.strip()
        if text:
            return text
    return None


__all__ = ["DESCRIPTION_TAG", "doc_block_lines", "extract_description", "find_doc_block"]
