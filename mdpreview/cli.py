"""Cyclopts CLI entrypoint for rendering Markdown files.

The ``md-viewer`` console script renders a Markdown file and either hands the
HTML to a viewer, exports it verbatim, or prints the outline and metadata the
engine derived. Any failure is reported as ``error: <message>`` on standard
error with exit status 1.

Examples
--------
Export a document to HTML:

>>> from mdpreview.cli import main
>>> main(["export", "README.md", "-o", "README.html"])  # doctest: +SKIP
Exported HTML to README.html
0

Open a document in the configured viewer:

>>> main(["open", "notes.md"])  # doctest: +SKIP
0
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import subprocess
import sys
import tempfile
import typing as typ
import webbrowser
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ConfigError, ViewerConfig, load_viewer_config
from .engine import MarkdownRenderer
from .engine.renderer import resolve_source_path
from .errors import MarkdownRenderError, ViewerLaunchError
from .models import RenderedDocument, outline_items
from .preview import build_preview_reply, metadata_attachment

if typ.TYPE_CHECKING:
    from .models import RenderOptions

LOG_LEVEL_ENV_VAR = "MDPREVIEW_LOG_LEVEL"

logger = logging.getLogger(__name__)

app = App(
    name="md-viewer",
    help="Render Markdown into sanitized, self-contained HTML.",
    config=cyclopts.config.Env("MDPREVIEW_", command=False),  # type: ignore[unknown-argument]
)

SourceArg = typ.Annotated[str, Parameter(help="Markdown file to render")]
FastOpt = typ.Annotated[
    bool, Parameter(help="Skip syntax highlighting and outline collection")
]
ConfigOpt = typ.Annotated[
    Path | None,
    Parameter(help="Path to viewer config", env_var="MDPREVIEW_CONFIG"),
]


def _display_path(path: Path) -> str:
    """Return ``path`` relative to the working directory for status messages.

    Paths outside the working directory, and relative paths, are shown as
    given.
    """
    if not path.is_absolute():
        return str(path)
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _effective_options(
    source: str, viewer_config: ViewerConfig, *, fast: bool
) -> RenderOptions:
    """Apply the large-file policy to the configured render options."""
    try:
        size = resolve_source_path(source).stat().st_size
    except OSError:
        # Let the renderer report the unreadable file.
        size = 0
    options = viewer_config.options_for_size(size, fast=fast)
    if options.fast_mode and not (fast or viewer_config.render.fast_mode):
        logger.info("Input is %d bytes; rendering %s in fast mode", size, source)
    return options


def _render(
    source: str, *, fast: bool, config: Path | None, outline: bool = False
) -> tuple[RenderedDocument, ViewerConfig]:
    viewer_config = load_viewer_config(config)
    options = _effective_options(source, viewer_config, fast=fast)
    if outline:
        # Headings are the whole output; size policy and toggles do not apply.
        options = dc.replace(options, fast_mode=False, toc_extraction_enabled=True)
    document = MarkdownRenderer().render_file(source, options)
    return document, viewer_config


def _launch_viewer(html_path: Path, command: list[str]) -> None:
    """Hand ``html_path`` to the viewer command or the system web browser."""
    if not command:
        if not webbrowser.open(html_path.as_uri()):
            msg = "Could not open a web browser to display the preview."
            raise ViewerLaunchError(msg)
        return

    try:
        completed = subprocess.run([*command, str(html_path)], check=False)  # noqa: S603
    except OSError as exc:
        msg = f"Could not start viewer '{command[0]}': {exc}"
        raise ViewerLaunchError(msg) from exc
    if completed.returncode != 0:
        msg = f"Viewer '{command[0]}' exited with status {completed.returncode}."
        raise ViewerLaunchError(msg)


@app.command(name="open", help="Render a Markdown file and open it in the viewer.")
def open_document(
    source: SourceArg,
    *,
    fast: FastOpt = False,
    config: ConfigOpt = None,
) -> None:
    """Render ``source`` to a temporary HTML file and launch the viewer.

    Parameters
    ----------
    source : str
        Path to the Markdown file.
    fast : bool, optional
        Force fast mode for this render.
    config : Path or None, optional
        Viewer configuration file (overridable via ``MDPREVIEW_CONFIG``).

    Raises
    ------
    MarkdownRenderError
        If the file cannot be resolved, read or decoded.
    ViewerLaunchError
        If the viewer command fails.
    """
    document, viewer_config = _render(source, fast=fast, config=config)
    stem = resolve_source_path(source).stem or "preview"
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", prefix=f"{stem}-", suffix=".html", delete=False
    ) as handle:
        handle.write(document.html)
    _launch_viewer(Path(handle.name), viewer_config.viewer_command)


@app.command(help="Render a Markdown file and write the HTML document.")
def export(
    source: SourceArg,
    *,
    output: typ.Annotated[
        Path, Parameter(name=["--output", "-o"], help="Destination HTML file")
    ],
    fast: FastOpt = False,
    config: ConfigOpt = None,
) -> None:
    """Write the rendered HTML for ``source`` verbatim to ``output``."""
    document, _ = _render(source, fast=fast, config=config)
    destination = output.expanduser()
    destination.write_text(document.html, encoding="utf-8")
    print(f"Exported HTML to {_display_path(destination)}")


@app.command(help="Print the heading outline of a Markdown file.")
def outline(
    source: SourceArg,
    *,
    config: ConfigOpt = None,
) -> None:
    """Print headings of levels 1-4, indented by level, with their anchors."""
    document, _ = _render(source, fast=False, config=config, outline=True)
    items = outline_items(document.headings)
    if not items:
        print("No headings found.")
        return
    for item in items:
        indent = "  " * (item.level - 1)
        print(f"{indent}{item.text} (#{item.anchor})")


@app.command(help="Print the title, description and keywords of a Markdown file.")
def metadata(
    source: SourceArg,
    *,
    fast: FastOpt = False,
    config: ConfigOpt = None,
) -> None:
    """Print the metadata attachment that previewers and indexers consume."""
    document, _ = _render(source, fast=fast, config=config)
    print(metadata_attachment(document))


@app.command(help="Write a preview bundle (HTML plus metadata attachment).")
def preview(
    source: SourceArg,
    *,
    output_dir: typ.Annotated[
        Path, Parameter(help="Folder receiving the preview files")
    ] = Path(),
    fast: FastOpt = False,
    config: ConfigOpt = None,
) -> None:
    """Write ``<name>.html`` and the metadata attachment into ``output_dir``."""
    viewer_config = load_viewer_config(config)
    options = _effective_options(source, viewer_config, fast=fast)
    reply = build_preview_reply(source, options=options)
    target_dir = output_dir.expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    html_path = target_dir / f"{resolve_source_path(source).stem or 'preview'}.html"
    html_path.write_text(reply.html, encoding="utf-8")
    print(f"wrote {_display_path(html_path)}")
    for name, text in reply.attachments.items():
        attachment_path = target_dir / name
        attachment_path.write_text(text, encoding="utf-8")
        print(f"wrote {_display_path(attachment_path)}")


def _configure_logging() -> None:
    level = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: typ.Sequence[str] | None = None) -> int:
    """Invoke the Cyclopts application that powers the ``md-viewer`` command.

    Parameters
    ----------
    argv : Sequence[str], optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Returns
    -------
    int
        ``0`` on success, ``1`` when rendering, configuration or the viewer
        failed. The error message is written to standard error.
    """
    _configure_logging()
    try:
        app(list(argv) if argv is not None else None)
    except (MarkdownRenderError, ConfigError, ViewerLaunchError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = ["app", "main"]


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
