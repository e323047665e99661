"""Data models for playback state."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from rsvp_reader.models.reading import Token

MIN_WPM = 100
MAX_WPM = 1000
DEFAULT_WPM = 300


class PlaybackStatus(str, Enum):
    """Scheduler state."""

    IDLE = "idle"
    RUNNING = "running"


class PlaybackState(BaseModel):
    """Snapshot of the scheduler cursor and speed."""

    model_config = ConfigDict(frozen=True)

    current_index: int = Field(default=0, ge=0)
    token_count: int = Field(default=0, ge=0)
    is_playing: bool = False
    words_per_minute: int = Field(default=DEFAULT_WPM, ge=MIN_WPM, le=MAX_WPM)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> PlaybackStatus:
        return PlaybackStatus.RUNNING if self.is_playing else PlaybackStatus.IDLE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> int:
        if self.token_count == 0:
            return 0
        # Half-up rounding
        return math.floor(100 * self.current_index / self.token_count + 0.5)

    @property
    def at_end(self) -> bool:
        return self.current_index >= self.token_count


class ContextWindow(BaseModel):
    """Tokens surrounding a cursor position."""

    model_config = ConfigDict(frozen=True)

    before: list[Token] = Field(default_factory=list)
    current: Token | None = None
    after: list[Token] = Field(default_factory=list)

    def words(self) -> list[str]:
        words = [t.text for t in self.before]
        if self.current is not None:
            words.append(self.current.text)
        words.extend(t.text for t in self.after)
        return words
