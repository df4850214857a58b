"""doclog command line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TypeVar

import click

from doclog import __version__
from doclog.builder import LogBuilder
from doclog.config import load_nearest
from doclog.errors import DoclogError
from doclog.glyphs import by_name
from doclog.levels import Severity
from doclog.renderer import emit
from doclog.spans import Span

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEVELS = [s.value for s in Severity] + ["warning"]


def _parse_spans(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[Span]:
    spans = []
    for value in values:
        start, sep, rest = value.partition(":")
        end, _, message = rest.partition(":")
        if not sep:
            raise click.BadParameter(f"'{value}' is not START:END[:MESSAGE]")
        try:
            spans.append(Span(int(start), int(end), trailing_message=message or None))
        except ValueError:
            raise click.BadParameter(f"'{value}' has non-integer offsets") from None
    return spans


@click.group()
@click.version_option(__version__, prog_name="doclog")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr.")
def main(verbose: bool) -> None:
    """Render compiler-style diagnostics for source files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--span", "spans", multiple=True, required=True, callback=_parse_spans,
    metavar="START:END[:MESSAGE]", help="Byte range to highlight (repeatable).",
)
@click.option("--level", type=click.Choice(_LEVELS), default="error", show_default=True)
@click.option("--title", default="", help="Title shown in the header line.")
@click.option("--code", "diag_code", default=None, help="Diagnostic code, e.g. E042.")
@click.option("--note", "notes", multiple=True, help="Note appended after the excerpt.")
@click.option("--previous-lines", type=int, default=None, help="Context lines before.")
@click.option("--next-lines", type=int, default=None, help="Context lines after.")
@click.option("--middle-lines", type=int, default=None, help="Gap size shown instead of '···'.")
@click.option("--ascii", "use_ascii", is_flag=True, help="Use ASCII glyphs.")
@click.option("--color/--no-color", default=None, help="Style output with ANSI colors.")
@click.option(
    "-o", "--output", type=click.File("w", encoding="utf-8"), default="-",
    help="Destination file.",
)
def render(
    path: str,
    spans: list[Span],
    level: str,
    title: str,
    diag_code: str | None,
    notes: tuple[str, ...],
    previous_lines: int | None,
    next_lines: int | None,
    middle_lines: int | None,
    use_ascii: bool,
    color: bool | None,
    output: IO[str],
) -> None:
    """Render highlighted byte ranges of PATH."""
    source_path = Path(path)
    try:
        config = load_nearest(source_path)
        glyphs = by_name("ascii" if use_ascii else config.render.charset)
        text = source_path.read_text(encoding="utf-8")

        builder = LogBuilder(Severity.parse(level))
        builder.header(title, code=diag_code, location=str(source_path))
        builder.code(
            text,
            *spans,
            file_path=source_path.name,
            previous_lines=_pick(previous_lines, config.code.previous_lines),
            next_lines=_pick(next_lines, config.code.next_lines),
            middle_lines=_pick(middle_lines, config.code.middle_lines),
            show_newlines=config.render.show_newlines,
        )
        for note in notes:
            builder.note("note", note)
        log = builder.build()
    except (DoclogError, ValueError) as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)

    logger.debug("rendering %d span(s) from %s", len(spans), source_path)
    emit(log, output, glyphs=glyphs, color=_pick(color, config.render.color))


def _pick(flag: T | None, configured: T) -> T:
    return configured if flag is None else flag


if __name__ == "__main__":
    main()
