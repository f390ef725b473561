"""Tests for the denylist HTML sanitizer."""

from __future__ import annotations

import pytest

from mdpreview.engine.sanitizer import sanitize_html


@pytest.mark.parametrize(
    "markup",
    [
        "<p>a</p><script>alert('xss')</script><p>b</p>",
        "<SCRIPT type='text/javascript'>\nalert(1)\n</SCRIPT>",
        '<iframe src="https://evil.example"></iframe>',
        "<object data='x.swf'><param name='a'></object>",
        '<embed src="x.swf">',
        "<script>never closed",
        "<p>text</p></script>",
        "<ScRiPt",
    ],
)
def test_active_tags_never_survive(markup: str) -> None:
    cleaned = sanitize_html(markup).lower()
    for tag in ("<script", "<iframe", "<object", "<embed"):
        assert tag not in cleaned


def test_removes_element_content_with_the_element() -> None:
    cleaned = sanitize_html("<p>keep</p><script>var secret = 1;</script>")
    assert cleaned == "<p>keep</p>"


def test_removes_event_handlers_in_any_quote_style() -> None:
    cleaned = sanitize_html(
        """<img src="a.png" onerror="alert(1)"><a href="/x" ONCLICK='go()'>x</a>"""
        """<div onmouseover=steal()>y</div>"""
    )
    assert "onerror" not in cleaned
    assert "onclick" not in cleaned.lower()
    assert "onmouseover" not in cleaned
    assert '<img src="a.png">' in cleaned
    assert '<a href="/x">x</a>' in cleaned


def test_rewrites_javascript_uris() -> None:
    cleaned = sanitize_html(
        """<a href="javascript:alert(1)">a</a><img src='JavaScript:void(0)'>"""
    )
    assert '<a href="#">a</a>' in cleaned
    assert "<img src='#'>" in cleaned


def test_leaves_safe_markup_and_text_alone() -> None:
    markup = '<p>Read <a href="https://example.com">the docs</a> online = yes.</p>'
    assert sanitize_html(markup) == markup


def test_handlers_after_a_quoted_angle_bracket_are_removed() -> None:
    cleaned = sanitize_html('<p><img alt="a>b" onerror="alert(1)" src="x"></p>')
    assert cleaned == '<p><img alt="a>b" src="x"></p>'


def test_handlers_after_single_quoted_angle_bracket_are_removed() -> None:
    cleaned = sanitize_html("<a title='1 > 0' onclick='go()' href='/y'>y</a>")
    assert cleaned == "<a title='1 > 0' href='/y'>y</a>"


@pytest.mark.parametrize(
    ("markup", "expected"),
    [
        ("<a href=javascript:alert(1)>x</a>", '<a href="#">x</a>'),
        ("<a href='JaVaScRiPt:void(0)'>x</a>", "<a href='#'>x</a>"),
        ('<img SRC=" javascript:alert(1)">', '<img SRC="#">'),
        ('<a title="x>y" href="javascript:go()">z</a>', '<a title="x>y" href="#">z</a>'),
    ],
)
def test_rewrites_javascript_uris_in_any_quote_style(markup: str, expected: str) -> None:
    assert sanitize_html(markup) == expected
