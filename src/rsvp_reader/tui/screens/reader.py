"""Reader screen: current word, progress, chapters and context."""

from __future__ import annotations

from typing import Callable

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, ProgressBar, Static

from rsvp_reader.core.player import PlaybackScheduler
from rsvp_reader.models.playback import PlaybackState
from rsvp_reader.tui.state import (
    SPEED_PRESETS,
    SPEED_STEP,
    format_context,
    format_status_line,
)
from rsvp_reader.tui.widgets import ChapterTable


class ReaderScreen(Screen):
    """Screen that drives the playback scheduler from key presses."""

    BINDINGS = [
        Binding("space", "toggle", "Play/Pause", show=True, priority=True),
        Binding("left", "skip_backward", "Back", show=True, priority=True),
        Binding("right", "skip_forward", "Forward", show=True, priority=True),
        Binding("up", "faster", "Faster", show=True, priority=True),
        Binding("down", "slower", "Slower", show=True, priority=True),
        Binding("left_square_bracket", "previous_chapter", "Prev Ch.", show=True),
        Binding("right_square_bracket", "next_chapter", "Next Ch.", show=True),
        Binding("r", "restart", "Restart", show=True),
        Binding("c", "toggle_context", "Context", show=True),
        Binding("q", "quit", "Quit", show=True),
    ] + [
        Binding(str(n), f"seek_percent({n * 10})", f"{n * 10}%", show=False)
        for n in range(10)
    ] + [
        Binding(f"f{n}", f"preset_speed({wpm})", f"{wpm} wpm", show=False)
        for n, wpm in enumerate(SPEED_PRESETS, start=1)
    ]

    def __init__(self, scheduler: PlaybackScheduler, **kwargs) -> None:
        super().__init__(**kwargs)
        self.scheduler = scheduler
        self._unsubscribe: list[Callable[[], None]] = []
        self._current_chapter: int | None = None

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()
        with Container(id="main"):
            yield Static(id="word")
            yield Static(id="status")
            yield ProgressBar(id="progress", total=100, show_eta=False)
            yield Static(id="chapter")
            yield Static(id="context")
            yield ChapterTable(id="chapter-table")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the chapter list and start listening to the scheduler."""
        scheduler = self.scheduler

        table = self.query_one("#chapter-table", ChapterTable)
        table.load_chapters(scheduler.text.chapters)

        self._unsubscribe = [
            scheduler.subscribe(self._on_progress),
            scheduler.subscribe_state(self._on_state),
        ]
        self._on_progress(scheduler.progress)
        self._on_state(scheduler.state)

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    # ------------------------------------------------------------------
    # Scheduler notifications
    # ------------------------------------------------------------------

    def _on_progress(self, progress: int) -> None:
        self.query_one("#progress", ProgressBar).update(progress=progress)

    def _on_state(self, state: PlaybackState) -> None:
        scheduler = self.scheduler
        token = scheduler.current_token

        if token is not None:
            word = f"[bold]{escape(token.text)}[/]"
        elif state.token_count:
            word = "[dim]The end[/]"
        else:
            word = "[dim]Ready to start reading[/]"
        self.query_one("#word", Static).update(word)

        self.query_one("#status", Static).update(
            format_status_line(state, scheduler.remaining_ms())
        )

        context = self.query_one("#context", Static)
        if context.display and not state.is_playing:
            context.update(format_context(scheduler.context_window()))

        self._update_chapter(scheduler.current_chapter_index())

    def _update_chapter(self, chapter_index: int | None) -> None:
        if chapter_index == self._current_chapter:
            return
        self._current_chapter = chapter_index

        label = self.query_one("#chapter", Static)
        if chapter_index is None:
            label.update("")
            return

        chapter = self.scheduler.text.chapters[chapter_index]
        label.update(f"[cyan]{escape(chapter.title)}[/]")
        self.query_one("#chapter-table", ChapterTable).highlight(chapter_index)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_toggle(self) -> None:
        self.scheduler.toggle()

    def action_skip_backward(self) -> None:
        self.scheduler.skip_backward()

    def action_skip_forward(self) -> None:
        self.scheduler.skip_forward()

    def action_faster(self) -> None:
        self.scheduler.set_speed(self.scheduler.state.words_per_minute + SPEED_STEP)

    def action_slower(self) -> None:
        self.scheduler.set_speed(self.scheduler.state.words_per_minute - SPEED_STEP)

    def action_preset_speed(self, words_per_minute: int) -> None:
        self.scheduler.set_speed(words_per_minute)

    def action_restart(self) -> None:
        self.scheduler.restart()

    def action_seek_percent(self, percent: int) -> None:
        self.scheduler.seek_to_percent(percent)

    def action_previous_chapter(self) -> None:
        current = self.scheduler.current_chapter_index()
        if current is not None:
            self.scheduler.jump_to_chapter(current - 1)

    def action_next_chapter(self) -> None:
        current = self.scheduler.current_chapter_index()
        if current is not None:
            self.scheduler.jump_to_chapter(current + 1)

    def action_toggle_context(self) -> None:
        context = self.query_one("#context", Static)
        context.display = not context.display
        if context.display:
            context.update(format_context(self.scheduler.context_window()))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Jump to the chapter chosen in the chapter list."""
        self.scheduler.jump_to_chapter(event.cursor_row)

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit(0)
