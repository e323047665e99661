"""Split extracted text into tokens and detect chapter headings."""

import math
import re

from rsvp_reader.models.reading import Chapter, SegmentedText, Token

DEFAULT_CHAPTER_TITLE = "Beginning"

# Numeric and Roman-numeral headings must be shorter than this, so ordinary
# short sentences starting with a number are not mistaken for headings.
HEADING_MAX_LENGTH = 30

HEADING_KEYWORD_PATTERN = re.compile(
    r"^(Chapter|Part|Section|Prologue|Epilogue|Introduction|Conclusion)\s+",
    re.IGNORECASE,
)
ROMAN_HEADING_PATTERN = re.compile(r"^[IVXLCDM]+[\s.:]", re.IGNORECASE)
NUMBER_HEADING_PATTERN = re.compile(r"^[0-9]+[\s.:]")

SENTENCE_END_CHARS = (".", "!", "?")


def is_heading_line(line: str) -> bool:
    """Classify a trimmed, non-empty line as a chapter heading.

    Rules are tried in order: keyword prefix, short Roman-numeral prefix,
    short numeric prefix.
    """
    if HEADING_KEYWORD_PATTERN.match(line):
        return True
    if ROMAN_HEADING_PATTERN.match(line) and len(line) < HEADING_MAX_LENGTH:
        return True
    if NUMBER_HEADING_PATTERN.match(line) and len(line) < HEADING_MAX_LENGTH:
        return True
    return False


def is_sentence_end(word: str) -> bool:
    return word.endswith(SENTENCE_END_CHARS)


def segment(full_text: str) -> SegmentedText:
    """Tokenize ``full_text`` and build the chapter index.

    Heading lines are tokenized too; their tokens belong to the chapter they
    open. Chapters without tokens are never recorded, so ``chapter_index`` on
    each token is its chapter's position in the returned list.
    """
    lines = [line.strip() for line in full_text.split("\n")]
    classified = [(line, is_heading_line(line)) for line in lines if line]

    tokens: list[Token] = []
    # (title, start_index, end_index) until the total is known
    spans: list[tuple[str, int, int]] = []
    active_title = DEFAULT_CHAPTER_TITLE
    active_start = 0
    paragraph_index = 0

    for line, is_heading in classified:
        if is_heading:
            if len(tokens) > active_start:
                spans.append((active_title, active_start, len(tokens) - 1))
            active_title = line
            active_start = len(tokens)

        chapter_index = len(spans)
        for word in line.split():
            tokens.append(
                Token(
                    text=word,
                    index=len(tokens),
                    is_sentence_end=is_sentence_end(word),
                    chapter_index=chapter_index,
                    chapter_title=active_title,
                    paragraph_index=paragraph_index,
                )
            )

        if not is_heading:
            paragraph_index += 1

    if not tokens:
        return SegmentedText()

    if len(tokens) > active_start or not spans:
        spans.append((active_title, active_start, len(tokens) - 1))

    total = len(tokens)
    chapters = [
        Chapter(
            title=title,
            start_index=start,
            end_index=end,
            progress=100 * start / total,
        )
        for title, start, end in spans
    ]
    return SegmentedText(tokens=tokens, chapters=chapters)


def get_progress_percentage(current_index: int, total_tokens: int) -> int:
    """Percentage of ``total_tokens`` reached, rounded half-up; 0 when empty."""
    if total_tokens <= 0:
        return 0
    return math.floor(100 * current_index / total_tokens + 0.5)
