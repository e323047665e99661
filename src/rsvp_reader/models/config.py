"""Reader configuration."""

from pydantic import BaseModel, Field

from rsvp_reader.models.playback import DEFAULT_WPM, MAX_WPM, MIN_WPM

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


class ReaderConfig(BaseModel):
    """Defaults and bounds for parsing and playback."""

    words_per_minute: int = Field(default=DEFAULT_WPM, ge=MIN_WPM, le=MAX_WPM)
    skip_step: int = Field(default=10, ge=1)
    context_radius: int = Field(default=50, ge=0)
    preview_before: int = Field(default=20, ge=0)
    preview_after: int = Field(default=30, ge=0)
    max_file_size: int = Field(default=MAX_FILE_SIZE, gt=0)
