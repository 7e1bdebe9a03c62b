"""Identifier and display-name helpers shared by the builder and the service."""

from __future__ import annotations

WORD_DELIMITER = "-"


def slug_to_name(slug: str) -> str:
    """Turn ``glass-shimmer-button`` into ``Glass Shimmer Button``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split(WORD_DELIMITER))


def slug_from_filename(filename: str, suffix: str) -> str:
    """Return the identifier encoded in ``filename`` (its name minus ``suffix``)."""
    if suffix and filename.endswith(suffix):
        return filename[: -len(suffix)]
    return filename


def synthesize_description(slug: str) -> str:
    return f"{slug_to_name(slug)} component"


__all__ = ["WORD_DELIMITER", "slug_from_filename", "slug_to_name", "synthesize_description"]
