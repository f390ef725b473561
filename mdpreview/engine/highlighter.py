"""Lexical syntax highlighting for fenced code blocks.

The highlighter is a deliberately small approximation of real tokenizers. It
runs an ordered series of passes over the code text (comments, strings,
keywords, literals, numbers). Each pass swaps what it matched for an opaque
placeholder made only of private-use characters, so later passes can never
match inside text that an earlier pass already classified. Placeholders are
expanded into ``<span class="tok-*">`` markup at the end. Only markup is
added; the text content of a block never changes.

Example
-------
>>> from mdpreview.engine.highlighter import highlight_code
>>> highlight_code("let x = 1", "swift")
'<span class="tok-keyword">let</span> x = <span class="tok-number">1</span>'
"""

from __future__ import annotations

import dataclasses as dc
import html
import logging
import re

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .text import compile_pattern

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = compile_pattern(
    r'<pre><code(?:\s+class="([^"]*)")?>([\s\S]*?)</code></pre>', re.IGNORECASE
)
LANGUAGE_CLASS_PATTERN = compile_pattern(r"language-([a-zA-Z0-9_+-]+)")

WORD = "A-Za-z0-9_"
BLOCK_COMMENT_PATTERN = compile_pattern(r"/\*[\s\S]*?\*/")
STRING_PATTERNS = tuple(
    compile_pattern(pattern)
    for pattern in (r'"(?:[^"\\]|\\.)*"', r"'(?:[^'\\]|\\.)*'", r"`(?:[^`\\]|\\.)*`")
)
LITERAL_PATTERN = compile_pattern(
    rf"(?<![{WORD}])(?:true|false|null|nil|None|True|False)(?![{WORD}])"
)
NUMBER_PATTERN = compile_pattern(rf"(?<![{WORD}])[0-9]+(?:\.[0-9]+)?(?![{WORD}])")

PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"
PLACEHOLDER_DIGIT_BASE = 0xE010
PLACEHOLDER_PATTERN = re.compile("\ue000([\ue010-\ue019]+)\ue001")


@dc.dataclass(frozen=True, slots=True)
class LanguageSpec:
    """Comment syntax and keyword matcher for one language family member."""

    block_comments: bool = False
    line_comment: re.Pattern[str] | None = None
    keyword_pattern: re.Pattern[str] | None = None


def _language(
    *,
    keywords: tuple[str, ...] = (),
    line_comment: str | None = None,
    block_comments: bool = False,
    ignore_case: bool = False,
) -> LanguageSpec:
    keyword_pattern = None
    if keywords:
        alternatives = "|".join(re.escape(word) for word in keywords)
        keyword_pattern = compile_pattern(
            rf"(?<![{WORD}])(?:{alternatives})(?![{WORD}])",
            re.IGNORECASE if ignore_case else 0,
        )
    return LanguageSpec(
        block_comments=block_comments,
        line_comment=compile_pattern(line_comment) if line_comment else None,
        keyword_pattern=keyword_pattern,
    )


C_LINE_COMMENT = r"//[^\n\r]*"
HASH_LINE_COMMENT = r"#[^\n\r]*"
SQL_LINE_COMMENT = r"--[^\n\r]*"

SWIFT_KEYWORDS = (
    "let", "var", "func", "if", "else", "guard", "return", "struct", "class",
    "enum", "protocol", "extension", "import", "for", "while", "switch", "case",
    "default", "break", "continue", "do", "try", "catch", "throw", "in",
    "public", "private", "fileprivate", "internal", "open", "static", "where",
    "defer", "async", "await",
)  # fmt: skip
JAVASCRIPT_KEYWORDS = (
    "const", "let", "var", "function", "if", "else", "return", "class", "new",
    "import", "export", "from", "async", "await", "try", "catch", "throw",
    "switch", "case", "default", "break", "continue", "for", "while",
)  # fmt: skip
TYPESCRIPT_KEYWORDS = JAVASCRIPT_KEYWORDS + (
    "interface", "type", "enum", "implements", "extends", "readonly",
    "namespace", "declare", "public", "private", "protected",
)  # fmt: skip
JAVA_KEYWORDS = (
    "class", "interface", "enum", "extends", "implements", "package", "import",
    "public", "private", "protected", "static", "final", "abstract", "void",
    "new", "return", "if", "else", "for", "while", "do", "switch", "case",
    "default", "break", "continue", "try", "catch", "finally", "throw",
    "throws", "this", "super", "int", "long", "double", "float", "boolean",
    "char", "var",
)  # fmt: skip
C_KEYWORDS = (
    "int", "char", "float", "double", "long", "short", "unsigned", "signed",
    "void", "const", "static", "extern", "struct", "union", "enum", "typedef",
    "sizeof", "return", "if", "else", "for", "while", "do", "switch", "case",
    "default", "break", "continue", "goto",
)  # fmt: skip
CPP_KEYWORDS = C_KEYWORDS + (
    "class", "namespace", "template", "typename", "public", "private",
    "protected", "virtual", "override", "new", "delete", "using", "auto",
    "nullptr", "try", "catch", "throw", "this",
)  # fmt: skip
RUST_KEYWORDS = (
    "fn", "let", "mut", "const", "static", "struct", "enum", "trait", "impl",
    "pub", "use", "mod", "crate", "self", "Self", "super", "match", "if",
    "else", "loop", "while", "for", "in", "return", "break", "continue",
    "where", "as", "ref", "move", "async", "await", "dyn", "unsafe", "type",
)  # fmt: skip
GO_KEYWORDS = (
    "package", "import", "func", "var", "const", "type", "struct",
    "interface", "map", "chan", "go", "defer", "select", "return", "if",
    "else", "for", "range", "switch", "case", "default", "break", "continue",
    "fallthrough", "goto",
)  # fmt: skip
KOTLIN_KEYWORDS = (
    "fun", "val", "var", "class", "object", "interface", "data", "sealed",
    "open", "override", "private", "public", "protected", "internal",
    "companion", "import", "package", "return", "if", "else", "when", "for",
    "while", "do", "try", "catch", "finally", "throw", "in", "is", "as",
    "suspend",
)  # fmt: skip
PYTHON_KEYWORDS = (
    "def", "class", "if", "elif", "else", "return", "import", "from", "as",
    "for", "while", "try", "except", "finally", "with", "lambda", "pass",
    "break", "continue",
)  # fmt: skip
RUBY_KEYWORDS = (
    "def", "class", "module", "if", "elsif", "else", "unless", "end", "do",
    "while", "until", "for", "in", "return", "yield", "begin", "rescue",
    "ensure", "require", "attr_accessor", "self",
)  # fmt: skip
SHELL_KEYWORDS = (
    "if", "then", "else", "fi", "for", "do", "done", "case", "esac",
    "function", "in",
)  # fmt: skip
SQL_KEYWORDS = (
    "select", "from", "where", "join", "left", "right", "inner", "outer",
    "group", "by", "order", "having", "insert", "into", "update", "delete",
    "values", "limit", "offset", "and", "or", "as",
)  # fmt: skip


def _c_family(keywords: tuple[str, ...]) -> LanguageSpec:
    return _language(
        keywords=keywords, line_comment=C_LINE_COMMENT, block_comments=True
    )


def _hash_family(keywords: tuple[str, ...] = ()) -> LanguageSpec:
    return _language(keywords=keywords, line_comment=HASH_LINE_COMMENT)


_javascript = _c_family(JAVASCRIPT_KEYWORDS)
_typescript = _c_family(TYPESCRIPT_KEYWORDS)
_python = _hash_family(PYTHON_KEYWORDS)
_ruby = _hash_family(RUBY_KEYWORDS)
_yaml = _hash_family()
_shell = _hash_family(SHELL_KEYWORDS)

LANGUAGES: dict[str, LanguageSpec] = {
    "swift": _c_family(SWIFT_KEYWORDS),
    "javascript": _javascript,
    "js": _javascript,
    "typescript": _typescript,
    "ts": _typescript,
    "java": _c_family(JAVA_KEYWORDS),
    "c": _c_family(C_KEYWORDS),
    "cpp": _c_family(CPP_KEYWORDS),
    "rust": _c_family(RUST_KEYWORDS),
    "go": _c_family(GO_KEYWORDS),
    "kotlin": _c_family(KOTLIN_KEYWORDS),
    "python": _python,
    "py": _python,
    "ruby": _ruby,
    "rb": _ruby,
    "yaml": _yaml,
    "yml": _yaml,
    "shell": _shell,
    "bash": _shell,
    "zsh": _shell,
    "sh": _shell,
    "toml": _hash_family(),
    "sql": _language(
        keywords=SQL_KEYWORDS, line_comment=SQL_LINE_COMMENT, ignore_case=True
    ),
    "json": _language(),
}


def resolve_language(name: str | None) -> LanguageSpec | None:
    """Return the settings for a ``language-X`` suffix, following Pygments aliases.

    Examples
    --------
    >>> resolve_language("Swift") is LANGUAGES["swift"]
    True
    >>> resolve_language("brainfudge") is None
    True
    """
    if not name:
        return None
    key = name.lower()
    if key in LANGUAGES:
        return LANGUAGES[key]
    try:
        lexer = get_lexer_by_name(key)
    except ClassNotFound:
        logger.debug("No highlighter for language %r", name)
        return None
    for alias in lexer.aliases:
        if alias in LANGUAGES:
            return LANGUAGES[alias]
    return None


class _TokenStash:
    """Swap matched spans for placeholders and expand them back into spans."""

    def __init__(self) -> None:
        self._tokens: list[tuple[str, str]] = []

    def stash(
        self, pattern: re.Pattern[str] | None, token_class: str, text: str
    ) -> str:
        if pattern is None:
            return text

        def _replace(match: re.Match[str]) -> str:
            self._tokens.append((token_class, match.group(0)))
            return _placeholder(len(self._tokens) - 1)

        return pattern.sub(_replace, text)

    def expand(self, text: str) -> str:
        parts: list[str] = []
        position = 0
        for match in PLACEHOLDER_PATTERN.finditer(text):
            parts.append(html.escape(text[position : match.start()], quote=False))
            token_class, raw = self._tokens[_placeholder_index(match.group(1))]
            parts.append(f'<span class="{token_class}">{self.expand(raw)}</span>')
            position = match.end()
        parts.append(html.escape(text[position:], quote=False))
        return "".join(parts)


def _placeholder(index: int) -> str:
    digits = "".join(chr(PLACEHOLDER_DIGIT_BASE + int(d)) for d in str(index))
    return f"{PLACEHOLDER_OPEN}{digits}{PLACEHOLDER_CLOSE}"


def _placeholder_index(digits: str) -> int:
    return int("".join(str(ord(ch) - PLACEHOLDER_DIGIT_BASE) for ch in digits))


def highlight_code(code_html: str, language: str | None) -> str:
    """Wrap the lexical tokens of one code block body in ``tok-*`` spans.

    Parameters
    ----------
    code_html : str
        Escaped contents of a ``<code>`` element.
    language : str, optional
        The ``language-X`` suffix declared on the block.

    Returns
    -------
    str
        Highlighted HTML, or ``code_html`` unchanged when the language is not
        recognized or the body already contains markup.
    """
    spec = resolve_language(language)
    if spec is None or "<" in code_html or PLACEHOLDER_OPEN in code_html:
        return code_html

    stash = _TokenStash()
    working = html.unescape(code_html)
    if spec.block_comments:
        working = stash.stash(BLOCK_COMMENT_PATTERN, "tok-comment", working)
    working = stash.stash(spec.line_comment, "tok-comment", working)
    for pattern in STRING_PATTERNS:
        working = stash.stash(pattern, "tok-string", working)
    working = stash.stash(spec.keyword_pattern, "tok-keyword", working)
    working = stash.stash(LITERAL_PATTERN, "tok-literal", working)
    working = stash.stash(NUMBER_PATTERN, "tok-number", working)
    return stash.expand(working)


def highlight_code_blocks(html_text: str, *, enabled: bool = True) -> str:
    """Highlight every ``<pre><code class="language-X">`` block in ``html_text``.

    Blocks without a ``language-`` class, or with an unknown language, pass
    through unmodified. Returns ``html_text`` untouched when ``enabled`` is
    false.
    """
    if not enabled or CODE_BLOCK_PATTERN is None:
        return html_text

    def _replace(match: re.Match[str]) -> str:
        class_string = match.group(1) or ""
        language = _language_from_class(class_string)
        if language is None:
            return match.group(0)
        highlighted = highlight_code(match.group(2), language)
        return f'<pre><code class="{class_string}">{highlighted}</code></pre>'

    return CODE_BLOCK_PATTERN.sub(_replace, html_text)


def _language_from_class(class_string: str) -> str | None:
    if LANGUAGE_CLASS_PATTERN is None:
        return None
    match = LANGUAGE_CLASS_PATTERN.search(class_string)
    if match is None:
        return None
    return match.group(1).lower()


__all__ = [
    "LANGUAGES",
    "LanguageSpec",
    "highlight_code",
    "highlight_code_blocks",
    "resolve_language",
]
