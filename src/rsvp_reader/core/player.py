"""RSVP playback scheduler: advances a cursor over tokens on a variable timer."""

import asyncio
import bisect
import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Protocol

from rsvp_reader.core.timing import base_interval_ms, pause_totals, token_delay_ms
from rsvp_reader.core.tokenizer import get_progress_percentage
from rsvp_reader.models.config import ReaderConfig
from rsvp_reader.models.playback import MAX_WPM, MIN_WPM, ContextWindow, PlaybackState
from rsvp_reader.models.reading import SegmentedText, Token

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]
StateCallback = Callable[[PlaybackState], None]


class TimerHandle(Protocol):
    """A pending deferred callback."""

    def cancel(self) -> None: ...


class Clock(ABC):
    """Source of cancellable deferred callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` after ``delay`` seconds unless cancelled."""
        pass


class AsyncioClock(Clock):
    """Clock backed by an asyncio event loop (the running one by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


def _is_nan(value: float) -> bool:
    return isinstance(value, float) and math.isnan(value)


def clamp_wpm(words_per_minute: int) -> int:
    return max(MIN_WPM, min(MAX_WPM, int(words_per_minute)))


class PlaybackScheduler:
    """Single-threaded playback state machine over a token sequence.

    At most one advancement is pending at a time. Every operation that moves
    the cursor outside the timer callback cancels the pending advancement
    first, so a stale callback can never overwrite a fresh seek. Arguments
    are clamped or ignored, never rejected with an exception.
    """

    def __init__(
        self,
        text: SegmentedText,
        clock: Clock | None = None,
        config: ReaderConfig | None = None,
    ):
        self.text = text
        self.config = config or ReaderConfig()
        self._clock = clock or AsyncioClock()
        self._index = 0
        self._playing = False
        self._wpm = clamp_wpm(self.config.words_per_minute)
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._closed = False
        self._progress_observers: list[ProgressCallback] = []
        self._state_observers: list[StateCallback] = []
        self._chapter_starts = [c.start_index for c in text.chapters]
        self._pause_totals = pause_totals([t.text for t in text.tokens])

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def token_count(self) -> int:
        return len(self.text.tokens)

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(
            current_index=self._index,
            token_count=self.token_count,
            is_playing=self._playing,
            words_per_minute=self._wpm,
        )

    @property
    def progress(self) -> int:
        return get_progress_percentage(self._index, self.token_count)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_token(self) -> Token | None:
        if 0 <= self._index < self.token_count:
            return self.text.tokens[self._index]
        return None

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register a progress observer. Returns a function that removes it."""
        self._progress_observers.append(callback)
        return lambda: self._discard(self._progress_observers, callback)

    def subscribe_state(self, callback: StateCallback) -> Callable[[], None]:
        """Register an observer for every state change."""
        self._state_observers.append(callback)
        return lambda: self._discard(self._state_observers, callback)

    @staticmethod
    def _discard(observers: list, callback: Callable) -> None:
        if callback in observers:
            observers.remove(callback)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def play(self) -> PlaybackState:
        """Start advancing. Ignored when running, empty or at the end."""
        if self._closed or self._playing or self._index >= self.token_count:
            return self.state
        self._playing = True
        self._arm()
        return self._changed()

    def pause(self) -> PlaybackState:
        """Stop advancing and keep the cursor where it is."""
        if self._closed or not self._playing:
            return self.state
        self._stop()
        return self._changed()

    def toggle(self) -> PlaybackState:
        """Play/pause button behaviour. At the end, restart and play."""
        if self._playing:
            return self.pause()
        if self.token_count and self._index >= self.token_count:
            self.restart()
        return self.play()

    def set_speed(self, words_per_minute: int) -> PlaybackState:
        """Change speed. An already scheduled advancement keeps its delay."""
        if self._closed:
            return self.state
        wpm = clamp_wpm(words_per_minute)
        if wpm == self._wpm:
            return self.state
        self._wpm = wpm
        return self._changed()

    def close(self) -> None:
        """Cancel any pending advancement and detach observers."""
        self._stop()
        self._closed = True
        self._progress_observers.clear()
        self._state_observers.clear()

    # ------------------------------------------------------------------
    # Seeking
    # ------------------------------------------------------------------

    def seek_to_index(self, index: int) -> PlaybackState:
        if _is_nan(index):
            return self.state
        return self._reposition(self._clamp(index))

    def seek_to_percent(self, percent: float) -> PlaybackState:
        """Seek to ``floor(percent / 100 * token_count)``, percent clamped to 0-100."""
        if math.isnan(percent):
            return self.state
        percent = max(0.0, min(100.0, float(percent)))
        return self._reposition(self._clamp(self._index_at_percent(percent)))

    def skip(self, count: int) -> PlaybackState:
        """Move the cursor ``count`` tokens forward (negative: backward)."""
        if _is_nan(count):
            return self.state
        return self._reposition(self._clamp(self._index + count))

    def skip_forward(self) -> PlaybackState:
        return self.skip(self.config.skip_step)

    def skip_backward(self) -> PlaybackState:
        return self.skip(-self.config.skip_step)

    def restart(self) -> PlaybackState:
        return self._reposition(0)

    def jump_to_chapter(self, chapter_index: int) -> PlaybackState:
        """Seek to a chapter's first token. Unknown chapters are ignored."""
        if not 0 <= chapter_index < len(self.text.chapters):
            log.debug(
                "Ignoring jump to chapter %d (%d chapters)",
                chapter_index,
                len(self.text.chapters),
            )
            return self.state
        return self._reposition(self.text.chapters[chapter_index].start_index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_chapter_index(self) -> int | None:
        """Index of the chapter containing the cursor (last one at the end)."""
        if not self._chapter_starts:
            return None
        index = min(self._index, self.token_count - 1)
        return max(0, bisect.bisect_right(self._chapter_starts, index) - 1)

    def context_window(self, radius: int | None = None) -> ContextWindow:
        """Tokens around the cursor."""
        if radius is None:
            radius = self.config.context_radius
        return self._window(self._index, radius, radius)

    def preview_at_percent(self, percent: float) -> ContextWindow:
        """Tokens around the position a seek to ``percent`` would land on."""
        percent = max(0.0, min(100.0, float(percent)))
        return self._window(
            self._index_at_percent(percent),
            self.config.preview_before,
            self.config.preview_after,
        )

    def remaining_ms(self) -> float:
        """Estimated display time from the cursor to the end."""
        return base_interval_ms(self._wpm) * self._pause_totals[self._index]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_at_percent(self, percent: float) -> int:
        return math.floor(percent / 100 * self.token_count)

    def _window(self, index: int, before: int, after: int) -> ContextWindow:
        tokens = self.text.tokens
        current = tokens[index] if 0 <= index < len(tokens) else None
        return ContextWindow(
            before=tokens[max(0, index - before) : index],
            current=current,
            after=tokens[index + 1 : index + 1 + after],
        )

    def _clamp(self, index: int) -> int:
        if self.token_count == 0:
            return 0
        if isinstance(index, float) and math.isinf(index):
            return 0 if index < 0 else self.token_count - 1
        return max(0, min(self.token_count - 1, int(index)))

    def _reposition(self, index: int) -> PlaybackState:
        if self._closed:
            return self.state
        was_playing = self._playing
        self._stop()
        moved = self._set_index(index)
        if moved or was_playing:
            return self._changed()
        return self.state

    def _stop(self) -> None:
        """Cancel the pending advancement, if any, and go idle."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1
        self._playing = False

    def _arm(self) -> None:
        """Schedule the next advancement for the current token."""
        token = self.text.tokens[self._index]
        delay = token_delay_ms(token.text, self._wpm) / 1000
        self._generation += 1
        generation = self._generation
        self._handle = self._clock.call_later(delay, lambda: self._advance(generation))

    def _advance(self, generation: int) -> None:
        if self._closed or not self._playing or generation != self._generation:
            # Cancelled after being dispatched
            return
        self._handle = None
        self._set_index(self._index + 1)
        if not self._playing or generation != self._generation:
            # A progress observer paused or repositioned
            return
        if self._index >= self.token_count:
            self._playing = False
        else:
            self._arm()
        self._changed()

    def _set_index(self, index: int) -> bool:
        if index == self._index:
            return False
        self._index = index
        progress = self.progress
        for callback in list(self._progress_observers):
            callback(progress)
        return True

    def _changed(self) -> PlaybackState:
        state = self.state
        for callback in list(self._state_observers):
            callback(state)
        return state
