"""End-to-end tests for :class:`mdpreview.engine.MarkdownRenderer`."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from mdpreview.engine import MarkdownRenderer, render_markdown
from mdpreview.errors import (
    InvalidSourceError,
    MarkdownRenderError,
    UnreadableSourceError,
    UnsupportedEncodingError,
)
from mdpreview.models import HeadingItem, RenderOptions


def test_heading_and_emphasis(renderer: MarkdownRenderer) -> None:
    html = renderer.render("# Hello\n\nThis is a **preview**.")
    assert '<h1 id="hello">Hello</h1>' in html
    assert "<strong>preview</strong>" in html


def test_duplicate_heading_anchors(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document(
        "## Requisitos previos\n\ntext\n\n## Requisitos previos\n"
    )
    assert 'id="requisitos-previos"' in document.html
    assert 'id="requisitos-previos-2"' in document.html
    assert [item.anchor for item in document.headings] == [
        "requisitos-previos",
        "requisitos-previos-2",
    ]


def test_script_tags_are_removed(renderer: MarkdownRenderer) -> None:
    html = renderer.render("Before\n\n<script>alert('xss')</script>\n\nAfter")
    assert "<script" not in html.lower()
    assert "After" in html


def test_inline_script_in_paragraph_is_removed(renderer: MarkdownRenderer) -> None:
    html = renderer.render('Text <img src="x" onerror="alert(1)"> <SCRIPT>x</SCRIPT>')
    assert "<script" not in html.lower()
    assert "onerror" not in html


def test_swift_fence_is_highlighted(renderer: MarkdownRenderer) -> None:
    html = renderer.render("```swift\nlet x = 1\n```\n")
    assert '<span class="tok-keyword">let</span>' in html
    assert '<span class="tok-number">1</span>' in html


def test_bare_url_is_linked(renderer: MarkdownRenderer) -> None:
    html = renderer.render("Visit https://example.com.")
    assert '<a href="https://example.com">https://example.com</a>.' in html


def test_front_matter_title_wins(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document("---\ntitle: Custom\n---\n# Body")
    assert document.metadata.title == "Custom"
    assert "<title>Custom</title>" in document.html
    assert "title: Custom" not in document.html


def test_front_matter_list_tags(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document(
        "---\ntags: [swift, markdown]\ndescription: Notes\n---\nBody text here."
    )
    assert document.metadata.keywords == ("swift", "markdown")
    assert document.metadata.description == "Notes"


def test_tables_render(renderer: MarkdownRenderer) -> None:
    html = renderer.render("| a | b |\n|---|---|\n| 1 | 2 |\n")
    soup = BeautifulSoup(html, "html.parser")
    assert [cell.get_text() for cell in soup.select("td")] == ["1", "2"]


def test_urls_in_code_stay_plain(renderer: MarkdownRenderer) -> None:
    html = renderer.render("Run `curl https://example.com` now.")
    assert "<code>curl https://example.com</code>" in html
    assert '<a href="https://example.com">' not in html


def test_empty_input_yields_complete_document(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document("   \n\n")
    assert document.html.lower().startswith("<!doctype html>")
    assert document.metadata.title == "Markdown Preview"
    assert document.metadata.keywords == ()
    assert document.headings == ()


def test_fallback_title_argument(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document("plain text only", title="notes.md")
    assert document.metadata.title == "notes.md"


def test_non_ascii_text_survives(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document("# Canción del Niño\n\n日本語のテキスト")
    assert '<h1 id="cancion-del-nino">Canción del Niño</h1>' in document.html
    assert "日本語のテキスト" in document.html


def test_fast_mode_skips_outline_and_highlighting(renderer: MarkdownRenderer) -> None:
    options = RenderOptions(
        syntax_highlighting_enabled=True, toc_extraction_enabled=True, fast_mode=True
    )
    document = renderer.render_document(
        "# Title\n\n```swift\nlet x = 1\n```\n", options=options
    )
    assert document.headings == ()
    assert '<span class="tok-keyword">' not in document.html
    assert '<h1 id="title">Title</h1>' in document.html


def test_individual_toggles(renderer: MarkdownRenderer) -> None:
    options = RenderOptions(syntax_highlighting_enabled=False)
    document = renderer.render_document("# T\n\n```swift\nlet x\n```", options=options)
    assert '<span class="tok-keyword">' not in document.html
    assert document.headings == (HeadingItem(level=1, text="T", anchor="t"),)


def test_outline_order_and_levels(renderer: MarkdownRenderer) -> None:
    document = renderer.render_document("# A\n\n## B\n\n### C\n\n###### F\n")
    assert [(item.level, item.text) for item in document.headings] == [
        (1, "A"),
        (2, "B"),
        (3, "C"),
        (6, "F"),
    ]


def test_fences_nested_in_lists_are_highlighted(renderer: MarkdownRenderer) -> None:
    html = renderer.render(
        "- Example\n\n  ```rust,no_run\n  fn main() {}\n  ```\n"
    )
    assert '<span class="tok-keyword">fn</span>' in html


def test_moderate_document(renderer: MarkdownRenderer) -> None:
    markdown = "\n".join(f"- item {index} https://example.com/{index}" for index in range(500))
    document = renderer.render_document(markdown)
    soup = BeautifulSoup(document.html, "html.parser")
    assert len(soup.select("li")) == 500
    assert len(soup.select("li a")) == 500


def test_render_markdown_helper() -> None:
    assert render_markdown("# Hi").metadata.title == "Hi"


def test_render_file_uses_file_name_as_fallback_title(
    renderer: MarkdownRenderer, tmp_path: Path
) -> None:
    source = tmp_path / "notes.md"
    source.write_text("Just a paragraph.", encoding="utf-8")
    document = renderer.render_file(source)
    assert document.metadata.title == "notes.md"


def test_render_file_accepts_file_uri(renderer: MarkdownRenderer, tmp_path: Path) -> None:
    source = tmp_path / "guide.md"
    source.write_text("# Guide", encoding="utf-8")
    document = renderer.render_file(source.as_uri())
    assert document.metadata.title == "Guide"


def test_render_file_tolerates_byte_order_mark(
    renderer: MarkdownRenderer, tmp_path: Path
) -> None:
    source = tmp_path / "bom.md"
    source.write_bytes("\ufeff---\ntitle: BOM\n---\ntext".encode())
    assert renderer.render_file(source).metadata.title == "BOM"


def test_render_file_rejects_remote_urls(renderer: MarkdownRenderer) -> None:
    with pytest.raises(InvalidSourceError, match="is not a local file"):
        renderer.render_file("https://example.com/readme.md")


def test_render_file_reports_missing_file(
    renderer: MarkdownRenderer, tmp_path: Path
) -> None:
    with pytest.raises(UnreadableSourceError, match="Failed to read missing.md"):
        renderer.render_file(tmp_path / "missing.md")


def test_render_file_rejects_invalid_utf8(
    renderer: MarkdownRenderer, tmp_path: Path
) -> None:
    source = tmp_path / "latin1.md"
    source.write_bytes("café".encode("latin-1"))
    with pytest.raises(UnsupportedEncodingError, match="latin1.md is not valid UTF-8"):
        renderer.render_file(source)


def test_render_errors_share_a_base_class() -> None:
    for error in (InvalidSourceError, UnreadableSourceError, UnsupportedEncodingError):
        assert issubclass(error, MarkdownRenderError)


def test_render_file_accepts_local_names_with_a_colon(
    renderer: MarkdownRenderer, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    Path("todo:list.md").write_text("# Todo\n\n- milk", encoding="utf-8")
    document = renderer.render_file("todo:list.md")
    assert document.metadata.title == "Todo"


@pytest.mark.parametrize(
    "source", ["ftp://example.com/notes.md", "file://remote-host/notes.md"]
)
def test_render_file_rejects_other_hosts_and_schemes(
    renderer: MarkdownRenderer, source: str
) -> None:
    with pytest.raises(InvalidSourceError):
        renderer.render_file(source)
