"""Tests for document metadata derivation."""

from __future__ import annotations

from mdpreview._constants import SEARCHABLE_TEXT_LIMIT
from mdpreview.engine.metadata import build_metadata, extract_keywords, split_keywords


def test_front_matter_takes_precedence() -> None:
    metadata = build_metadata(
        '<h1 id="body">Body</h1><p>First paragraph.</p>',
        "notes.md",
        {"title": "Custom", "description": "From front matter", "tags": "swift; preview"},
    )
    assert metadata.title == "Custom"
    assert metadata.description == "From front matter"
    assert metadata.keywords == ("swift", "preview")


def test_parsed_list_tags_become_keywords() -> None:
    metadata = build_metadata("<p>x</p>", "t", {"tags": "a, b"})
    assert metadata.keywords == ("a", "b")


def test_blank_front_matter_values_fall_through() -> None:
    metadata = build_metadata(
        '<h1 id="heading">Heading <em>One</em></h1><p>Intro &amp; more.</p>',
        "notes.md",
        {"title": "   ", "description": "", "tags": " ", "keywords": "x; y; x"},
    )
    assert metadata.title == "Heading One"
    assert metadata.description == "Intro & more."
    assert metadata.keywords == ("x", "y")


def test_fallback_title_and_description_from_text() -> None:
    body = "<ul><li>" + "word " * 100 + "</li></ul>"
    metadata = build_metadata(body, "notes.md", {})
    assert metadata.title == "notes.md"
    assert metadata.description == metadata.searchable_text[:220]
    assert len(metadata.description) == 220


def test_searchable_text_is_capped() -> None:
    body = "<p>" + "abcdefghi " * 2_000 + "</p>"
    metadata = build_metadata(body, "t", {})
    assert len(metadata.searchable_text) == SEARCHABLE_TEXT_LIMIT
    assert "<" not in metadata.searchable_text


def test_searchable_text_collapses_markup_and_entities() -> None:
    metadata = build_metadata("<p>a&nbsp;&lt;b&gt;</p>\n\n<p>c</p>", "t", {})
    assert metadata.searchable_text == "a <b> c"


def test_extract_keywords_orders_by_frequency_then_word() -> None:
    text = "zeta alpha zeta beta beta alpha omega tiny é café CAFÉ"
    assert extract_keywords(text) == ["alpha", "beta", "cafe", "zeta", "omega", "tiny"]


def test_extract_keywords_respects_limit_and_minimum_length() -> None:
    words = " ".join(f"word{index:02d}" for index in range(20))
    keywords = extract_keywords(words + " abc the and")
    assert len(keywords) == 12
    assert keywords[0] == "word00"
    assert all(len(word) >= 4 for word in keywords)


def test_extract_keywords_on_empty_text() -> None:
    assert extract_keywords("") == []


def test_split_keywords_handles_mixed_separators() -> None:
    assert split_keywords(" swift;markdown , preview ,") == ["swift", "markdown", "preview"]
