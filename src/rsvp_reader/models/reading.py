"""Data models for the segmented token sequence."""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Token(BaseModel):
    """One whitespace-delimited display unit."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    index: int = Field(ge=0)
    is_sentence_end: bool = False
    chapter_index: int = Field(default=0, ge=0)
    chapter_title: str = ""
    paragraph_index: int = Field(default=0, ge=0)


class Chapter(BaseModel):
    """A contiguous, inclusive range of tokens opened by one heading."""

    model_config = ConfigDict(frozen=True)

    title: str
    start_index: int = Field(ge=0)
    end_index: int
    progress: float = 0.0  # 100 * start_index / total tokens

    @computed_field  # type: ignore[prop-decorator]
    @property
    def token_count(self) -> int:
        return max(0, self.end_index - self.start_index + 1)

    def contains(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index


class SegmentedText(BaseModel):
    """Tokens and chapter index produced from one document's text."""

    model_config = ConfigDict(frozen=True)

    tokens: list[Token] = Field(default_factory=list)
    chapters: list[Chapter] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tokens)

    def chapter_at(self, index: int) -> Chapter | None:
        """Return the chapter containing token ``index``, if any."""
        for chapter in self.chapters:
            if chapter.contains(index):
                return chapter
        return None
