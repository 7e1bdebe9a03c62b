"""Tests for description extraction."""

from __future__ import annotations

from tests._fixtures.sources import ICON_TOAST, MAGNETIC_BUTTON
from uiregistry.analyzers import extract_description


def test_tagged_description_wins() -> None:
    source = "/**\n * Some summary\n * @description Foo bar  \n */\nexport const A = 1;"
    assert extract_description(source, "a") == "Foo bar"
    assert extract_description(ICON_TOAST, "toast") == "Toast notification with spring entrance"


def test_first_content_line_used_without_tag() -> None:
    source = "/**\n * A nice button\n * @param size the size\n */"
    assert extract_description(source, "nice-button") == "A nice button"
    assert extract_description(MAGNETIC_BUTTON, "magnetic-button") == (
        "Button that follows cursor with magnetic effect"
    )


def test_blank_lines_are_skipped() -> None:
    source = "/**\n *\n * Second line wins\n */"
    assert extract_description(source, "x") == "Second line wins"


def test_single_line_block() -> None:
    assert extract_description("/** Compact card */", "compact-card") == "Compact card"


def test_marker_line_is_not_a_description() -> None:
    source = "/**\n * @param open whether the modal is open\n */"
    assert extract_description(source, "modal") == "Modal component"


def test_other_tags_starting_with_description_are_ignored() -> None:
    source = "/**\n * @descriptionless nothing\n */"
    assert extract_description(source, "odd-tag") == "Odd Tag component"


def test_no_doc_block_synthesizes_from_identifier() -> None:
    source = "// A regular comment\nexport function GlassShimmerButton() {}"
    assert extract_description(source, "glass-shimmer-button") == "Glass Shimmer Button component"


def test_only_first_block_is_considered() -> None:
    source = "/**\n * @param a first\n */\n/**\n * Later block\n */"
    assert extract_description(source, "two-blocks") == "Two Blocks component"
