"""Splits anonymized markup into text and markup runs.

The rule matcher checks the text runs only; offsets it reports against that
plain text are mapped back onto the anonymized markup, where contexts are
extracted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from wikifix.anonymization.models import Segment
from wikifix.markup.parser import CANONICAL_TAG

_CANONICAL_MARKUP_RE = re.compile(rf"</?{CANONICAL_TAG} ?/?>")


@dataclass(frozen=True)
class AnnotatedText:
    """Ordered text and markup runs of one anonymized document."""

    markup: str
    segments: tuple[Segment, ...]

    @property
    def plain_text(self) -> str:
        return "".join(segment.text for segment in self._text_segments())

    def markup_offset(self, position: int, is_end: bool = False) -> int:
        """Map a plain-text *position* to an offset in the anonymized markup.

        End positions attach to the text before them, so a span ending right
        before a tag does not take the tag in.

        Raises:
            ValueError: if *position* lies outside the plain text.
        """
        plain_length = len(self.plain_text)
        if not 0 <= position <= plain_length:
            raise ValueError(f"Position {position} outside plain text of length {plain_length}")

        plain_start = 0
        for segment in self._text_segments():
            plain_end = plain_start + len(segment.text)
            if is_end and plain_start < position <= plain_end:
                return segment.offset + position - plain_start
            if not is_end and plain_start <= position < plain_end:
                return segment.offset + position - plain_start
            plain_start = plain_end

        if is_end and position == 0:
            return self.markup_offset(0)
        return len(self.markup)

    def markup_span(self, start: int, end: int) -> tuple[int, int]:
        """Map a plain-text span onto the anonymized markup."""
        if start == end:
            mapped = self.markup_offset(start)
            return mapped, mapped
        return self.markup_offset(start), self.markup_offset(end, is_end=True)

    def _text_segments(self) -> list[Segment]:
        return [segment for segment in self.segments if not segment.is_markup]


def annotate(anonymized_html: str) -> AnnotatedText:
    """Split *anonymized_html* into text runs and canonical tags, in order."""
    segments: list[Segment] = []
    position = 0
    for match in _CANONICAL_MARKUP_RE.finditer(anonymized_html):
        if match.start() > position:
            segments.append(Segment(anonymized_html[position : match.start()], False, position))
        segments.append(Segment(match.group(), True, match.start()))
        position = match.end()
    if position < len(anonymized_html):
        segments.append(Segment(anonymized_html[position:], False, position))
    return AnnotatedText(markup=anonymized_html, segments=tuple(segments))
