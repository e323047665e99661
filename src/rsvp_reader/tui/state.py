"""State management for the reader TUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from rsvp_reader.core.session import ReadingSession
from rsvp_reader.models.config import ReaderConfig

if TYPE_CHECKING:
    from rsvp_reader.models.playback import ContextWindow, PlaybackState

# Speed change per key press, and the speeds bound to F1-F4
SPEED_STEP = 50
SPEED_PRESETS = (200, 300, 500, 700)


@dataclass
class ReaderState:
    """Shared state across reader screens."""

    book_path: Path | None = None
    config: ReaderConfig = field(default_factory=ReaderConfig)
    session: ReadingSession | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = ReadingSession(config=self.config)


# ============================================================================
# Display helpers
# ============================================================================


def format_duration(ms: float) -> str:
    """Format milliseconds as ``H:MM:SS`` or ``M:SS``."""
    seconds = int(ms // 1000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_status_line(state: "PlaybackState", remaining_ms: float) -> str:
    """One-line summary under the current word."""
    if state.token_count == 0:
        return "[dim]No readable text[/]"
    position = min(state.current_index + 1, state.token_count)
    icon = "[green]▶[/]" if state.is_playing else "[yellow]⏸[/]"
    return (
        f"{icon}  Word {position:,} of {state.token_count:,}"
        f"  [dim]•[/]  {state.progress}% complete"
        f"  [dim]•[/]  {state.words_per_minute} wpm"
        f"  [dim]•[/]  {format_duration(remaining_ms)} left"
    )


def format_context(window: "ContextWindow") -> str:
    """Context view markup with the current word highlighted."""
    parts = [escape(t.text) for t in window.before]
    if window.current is not None:
        parts.append(f"[bold reverse] {escape(window.current.text)} [/]")
    parts.extend(escape(t.text) for t in window.after)
    return " ".join(parts)


def truncate_title(title: str, width: int = 40) -> str:
    if len(title) <= width:
        return title
    return title[: width - 3] + "..."
