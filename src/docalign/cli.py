"""Command-line interface for the alignment engine."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docalign.alignment import (
    locate_text,
    preprocess,
    resolve_box_selection,
    resolve_selection,
    split_into_columns,
)
from docalign.config import settings
from docalign.errors import AlignmentError
from docalign.models import AnnotatedDocument, DocIntResponse, Point, ScreenRect, ViewportContext

app = typer.Typer(
    name="docalign",
    help="Map selections to text and text to highlights on extracted documents",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("docalign")
    logger.handlers = [RichHandler(console=err_console, show_path=False)]
    logger.setLevel(level.upper())


def _parse_numbers(value: str, count: int, name: str) -> list[float]:
    try:
        numbers = [float(part) for part in value.split(",")]
    except ValueError:
        raise typer.BadParameter(
            f"{name} must be {count} comma-separated numbers"
        ) from None
    if len(numbers) != count:
        raise typer.BadParameter(f"{name} must be {count} comma-separated numbers")
    return numbers


def _load(path: Path) -> AnnotatedDocument:
    """Load and preprocess a document JSON file."""
    try:
        document = DocIntResponse.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        err_console.print(f"[bold red]Invalid document:[/bold red] {path}")
        err_console.print(f"[dim]{exc}[/dim]")
        raise typer.Exit(code=1)
    return preprocess(document)


def _echo_json(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _run(action):
    try:
        return action()
    except AlignmentError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)


def _document_argument():
    return typer.Argument(
        ..., exists=True, dir_okay=False, help="Layout analysis JSON file"
    )


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    """Configure logging for all commands."""
    _configure_logging(log_level)


@app.command()
def regions(
    document_path: Path = _document_argument(),
    page: Optional[int] = typer.Option(None, help="Only show this page"),
) -> None:
    """Show the paragraph regions computed for each page."""
    document = _load(document_path)
    if page is not None:
        pages = [_run(lambda: document.get_page(page))]
    else:
        pages = document.pages

    for annotated in pages:
        console.print(
            f"[bold blue]Page {annotated.page_number}:[/bold blue] "
            f"{len(annotated.regions)} regions"
        )
        table = Table("Paragraph", "Lines", "Words", "Text")
        for region in annotated.regions:
            paragraph = document.paragraphs[region.paragraph_index]
            table.add_row(
                str(region.paragraph_index),
                f"{region.line_indices[0]}-{region.line_indices[1]}",
                f"{region.word_indices[0]}-{region.word_indices[1]}",
                paragraph.content[:40],
            )
        console.print(table)


@app.command()
def columns(
    document_path: Path = _document_argument(),
    page: int = typer.Option(1, help="Page number"),
) -> None:
    """Show how a page's lines split into columns."""
    document = _load(document_path)
    annotated = _run(lambda: document.get_page(page))
    cols = split_into_columns(annotated.lines)

    console.print(f"[bold blue]Page {page}:[/bold blue] {len(cols)} columns")
    table = Table("Column", "Lines", "First line", "Last line")
    for index, column in enumerate(cols):
        table.add_row(
            str(index),
            str(len(column.lines)),
            column.lines[0].content if column.lines else "",
            column.lines[-1].content if column.lines else "",
        )
    console.print(table)


@app.command()
def locate(
    document_path: Path = _document_argument(),
    text: str = typer.Argument(..., help="Excerpt to locate"),
    force_overlap: bool = typer.Option(
        settings.force_overlap, help="Close gaps between highlighted lines"
    ),
) -> None:
    """Print the highlight bounds of an excerpt."""
    document = _load(document_path)
    bounds = locate_text(text, document, force_overlap=force_overlap)
    _echo_json({"bounds": [b.model_dump(by_alias=True) for b in bounds]})


@app.command()
def box(
    document_path: Path = _document_argument(),
    page: int = typer.Option(1, help="Page number"),
    start: str = typer.Option(..., "--from", help="Box corner as X,Y in page units"),
    end: str = typer.Option(..., "--to", help="Opposite corner as X,Y"),
) -> None:
    """Resolve a drawn box to excerpt text and bounds."""
    document = _load(document_path)
    x0, y0 = _parse_numbers(start, 2, "--from")
    x1, y1 = _parse_numbers(end, 2, "--to")
    selection = _run(
        lambda: resolve_box_selection(page, Point(x=x0, y=y0), Point(x=x1, y=y1), document)
    )
    _echo_json(selection.model_dump(by_alias=True))


@app.command()
def select(
    document_path: Path = _document_argument(),
    page: int = typer.Option(1, help="Page number"),
    rect: list[str] = typer.Option(..., help="Selection rect as X,Y,W,H in pixels"),
    dx: float = typer.Option(0.0, help="Horizontal viewport offset in pixels"),
    dy: float = typer.Option(0.0, help="Vertical viewport offset in pixels"),
    multiplier: float = typer.Option(
        settings.pixels_per_unit, help="Pixels per page unit"
    ),
) -> None:
    """Resolve pixel selection rectangles to excerpt text and bounds."""
    document = _load(document_path)
    rects = []
    for value in rect:
        x, y, width, height = _parse_numbers(value, 4, "--rect")
        rects.append(ScreenRect(x=x, y=y, width=width, height=height))
    viewport = ViewportContext(dx=dx, dy=dy, multiplier=multiplier)

    selection = _run(lambda: resolve_selection(page, rects, document, viewport))
    _echo_json(selection.model_dump(by_alias=True))


if __name__ == "__main__":
    app()
