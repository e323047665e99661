"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rsvp_reader.core.content_processor import ContentProcessor
from rsvp_reader.core.errors import EpubError
from rsvp_reader.core.parser_factory import ParserFactory
from rsvp_reader.core.tokenizer import segment
from rsvp_reader.logging_utils import setup_logging
from rsvp_reader.models.book import ExtractedDocument
from rsvp_reader.models.config import ReaderConfig
from rsvp_reader.models.playback import DEFAULT_WPM, MAX_WPM, MIN_WPM

app = typer.Typer(
    name="rsvp",
    help="Read EPUB books one word at a time (RSVP).",
    add_completion=False,
)

console = Console()

BookPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the EPUB file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Read EPUB books one word at a time (RSVP)."""
    setup_logging(verbose)


def _load_document(book_path: Path) -> ExtractedDocument:
    """Validate and parse a book, exiting with a message on failure."""
    try:
        return ParserFactory.create(book_path).parse()
    except EpubError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


def format_file_size(size: int) -> str:
    """Format a byte count for display."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{round(size / 1024)} KB"
    return f"{size / 1024 / 1024:.1f} MB"


@app.command()
def info(book_path: BookPath) -> None:
    """Display book metadata and detected chapters."""
    document = _load_document(book_path)
    segmented = segment(document.text)

    info_lines = [
        f"[bold]{escape(document.metadata.title)}[/]",
        "",
        f"[dim]Author:[/] {escape(document.metadata.author)}",
        f"[dim]Language:[/] {escape(document.metadata.language or 'Unknown')}",
        f"[dim]Publisher:[/] {escape(document.metadata.publisher or 'Unknown')}",
        f"[dim]Size:[/] {format_file_size(document.metadata.byte_size)}",
        f"[dim]Words:[/] {len(segmented.tokens):,}",
        f"[dim]Chapters:[/] {len(segmented.chapters)}",
    ]

    if document.skipped_parts:
        info_lines.append("")
        info_lines.append(
            f"[yellow]Skipped {document.skipped_parts} unresolved spine item(s)[/]"
        )

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )

    if not segmented.chapters:
        console.print("[dim]No readable text found[/]")
        return

    console.print()
    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Words", justify="right", style="green")
    table.add_column("Start", justify="right", style="dim")

    for i, chapter in enumerate(segmented.chapters):
        table.add_row(
            str(i + 1),
            escape(chapter.title),
            f"{chapter.token_count:,}",
            f"{round(chapter.progress)}%",
        )

    console.print(table)
    console.print()


@app.command()
def text(
    book_path: BookPath,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the extracted text to this file instead of stdout",
        ),
    ] = None,
) -> None:
    """Print the extracted reading-order text."""
    document = _load_document(book_path)

    if output is None:
        console.print(
            document.text, markup=False, highlight=False, emoji=False, soft_wrap=True
        )
        return

    output.write_text(document.text, encoding="utf-8")
    stats = ContentProcessor().get_stats(document.text)
    console.print(
        f"[green]Wrote {stats['word_count']:,} words "
        f"({stats['paragraph_count']:,} paragraphs) to {escape(str(output))}[/]"
    )


@app.command()
def read(
    book_path: BookPath,
    wpm: Annotated[
        int,
        typer.Option(
            "--wpm",
            "-w",
            help="Reading speed in words per minute",
            min=MIN_WPM,
            max=MAX_WPM,
        ),
    ] = DEFAULT_WPM,
    skip: Annotated[
        int,
        typer.Option(
            "--skip",
            "-s",
            help="Words to jump with the skip keys",
            min=1,
        ),
    ] = 10,
) -> None:
    """Open the interactive RSVP reader."""
    if not ParserFactory.is_supported(book_path):
        console.print(f"[red]Unsupported file format: {escape(book_path.suffix)}[/]")
        console.print("[dim]Supported formats: .epub[/]")
        raise typer.Exit(1)

    from rsvp_reader.tui import ReaderApp

    config = ReaderConfig(words_per_minute=wpm, skip_step=skip)
    ReaderApp(book_path=book_path, config=config).run()


if __name__ == "__main__":
    app()
