"""Chapter list widget."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import DataTable

from rsvp_reader.models.reading import Chapter
from rsvp_reader.tui.state import truncate_title


class ChapterTable(DataTable):
    """DataTable listing chapters with their word count and start position."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def load_chapters(self, chapters: list[Chapter]) -> None:
        """Replace the table contents with ``chapters``."""
        self.clear(columns=True)
        self.add_column("#", key="number", width=4)
        self.add_column("Chapter", key="title")
        self.add_column("Words", key="words", width=10)
        self.add_column("Start", key="start", width=7)

        for i, chapter in enumerate(chapters):
            self.add_row(
                str(i + 1),
                truncate_title(chapter.title),
                Text(f"{chapter.token_count:,}", justify="right"),
                Text(f"{round(chapter.progress)}%", justify="right"),
            )

    def highlight(self, row: int) -> None:
        """Move the cursor to the chapter currently being read."""
        if 0 <= row < self.row_count:
            self.move_cursor(row=row)
