"""Common literal values used across mdpreview.

These constants keep limits and defaults centralized so the engine, the CLI,
and tests can import the same values without drifting. Intended for internal
use within the mdpreview package.

Examples
--------
>>> from mdpreview import _constants
>>> _constants.SEARCHABLE_TEXT_LIMIT
12000
>>> _constants.OUTLINE_MAX_LEVEL
4
"""

DEFAULT_TITLE = "Markdown Preview"
SEARCHABLE_TEXT_LIMIT = 12_000
DESCRIPTION_FALLBACK_LENGTH = 220
KEYWORD_LIMIT = 12
KEYWORD_MIN_LENGTH = 4
OUTLINE_MAX_LEVEL = 4
FALLBACK_SLUG = "section"
METADATA_ATTACHMENT_NAME = "metadata.txt"
DEFAULT_LARGE_FILE_THRESHOLD = 5_000_000
