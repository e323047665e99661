"""Main Textual application for the RSVP reader."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from rsvp_reader.core.errors import EpubError
from rsvp_reader.models.config import ReaderConfig
from rsvp_reader.tui.state import ReaderState


class ReaderApp(App):
    """Terminal RSVP reader for one EPUB."""

    CSS_PATH = "styles.tcss"
    TITLE = "rsvp"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        book_path: Path,
        config: ReaderConfig | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.theme = "monokai"
        self.state = ReaderState(book_path=book_path, config=config or ReaderConfig())

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        """Parse the book, then show the reader or an error."""
        from rsvp_reader.tui.screens import ReaderScreen
        from rsvp_reader.tui.widgets import ErrorDialog

        book_path = self.state.book_path
        session = self.state.session
        if book_path is None or session is None:
            self.exit(1)
            return

        try:
            scheduler = session.load_path(book_path)
        except (EpubError, OSError) as e:
            self.push_screen(
                ErrorDialog(
                    title="Could not open book",
                    message=str(e),
                    options=[("q", "Quit")],
                ),
                callback=lambda _: self.exit(1),
            )
            return

        document = session.document
        if document is not None:
            self.sub_title = f"{document.metadata.title} by {document.metadata.author}"
        self.push_screen(ReaderScreen(scheduler))

    def on_unmount(self) -> None:
        """Cancel any pending advancement before the loop goes away."""
        if self.state.session is not None:
            self.state.session.close()

    def action_quit(self) -> None:
        """Quit the application."""
        self.exit(0)
