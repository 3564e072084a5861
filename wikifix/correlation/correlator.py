"""Maps a marked rendered-text context back onto the document source.

Processing flow:
1. Reduce the context to the text run holding the markers: from just after
   the last ``>`` before ``<err>`` to just before the first ``<`` after
   ``</err>``. Surrounding markup picked up by large contexts is dropped.
2. Strip the markers to get the literal that must appear in the source.
3. Locate the literal: absent or ambiguous literals are refused.
4. Substitute the suggestion for the marked span and splice the corrected
   snippet into the source.
"""

from __future__ import annotations

from dataclasses import dataclass

from wikifix.context.models import MARKER_END, MARKER_START
from wikifix.correlation.models import Corrected, CorrelationResult
from wikifix.logging.logger import Log
from wikifix.markup.parser import CANONICAL_TAG
from wikifix.outcomes.models import NotApplicable, NotApplicableReason

_CANONICAL_OPEN = f"<{CANONICAL_TAG}"
_CANONICAL_CLOSE = f"</{CANONICAL_TAG}"


@dataclass(frozen=True)
class _Markers:
    """Marker positions inside a reduced context."""

    start: int  # index of MARKER_START
    end: int  # index of MARKER_END


class WikitextCorrelator:
    """Pure, total correlation of marked contexts with source text."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reduce(self, marked_context: str) -> str:
        """Keep only the marker pair and the plain text directly around it.

        A context without a non-empty marker pair is returned unchanged.
        """
        markers = _find_markers(marked_context)
        if markers is None:
            return marked_context
        run_start = marked_context.rfind(">", 0, markers.start) + 1
        run_end = marked_context.find("<", markers.end + len(MARKER_END))
        if run_end == -1:
            run_end = len(marked_context)
        return marked_context[run_start:run_end]

    def literal(self, marked_context: str) -> str:
        """Source literal for *marked_context*: the reduced run without markers."""
        return _strip_markers(self.reduce(marked_context))

    def correlate(
        self,
        source_text: str,
        marked_context: str,
        suggestion: str,
    ) -> CorrelationResult:
        reduced = self.reduce(marked_context)
        markers = _find_markers(reduced)
        literal = _strip_markers(reduced)

        if markers is None:
            return self._no_match(literal, "context has no marked error")
        if _CANONICAL_OPEN in reduced or _CANONICAL_CLOSE in reduced:
            return self._no_match(literal, "context can't be stripped of its markup")

        first = source_text.find(literal)
        if first == -1:
            return self._no_match(literal, "not found in the source text")
        if source_text.rfind(literal) != first:
            message = f"Match string '{literal}' is found multiple times in the source text"
            Log.info(message)
            return NotApplicable(NotApplicableReason.MULTIPLE_MATCHES, message)

        corrected_snippet = (
            reduced[: markers.start] + suggestion + reduced[markers.end + len(MARKER_END) :]
        )
        corrected_text = source_text[:first] + corrected_snippet + source_text[first + len(literal) :]
        Log.debug(f"Match string '{literal}' found once in the source text")
        return Corrected(
            original_snippet=literal,
            corrected_snippet=corrected_snippet,
            corrected_text=corrected_text,
        )

    def overlaps_title(self, marked_context: str, title: str) -> bool:
        """True when the marked error lies inside the document title."""
        if not title:
            return False
        reduced = self.reduce(marked_context)
        markers = _find_markers(reduced)
        if markers is None:
            return False
        error_start = markers.start
        error_end = markers.end - len(MARKER_START)
        title_start = _strip_markers(reduced).find(title)
        return title_start > -1 and title_start <= error_start and title_start + len(title) >= error_end

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _no_match(self, literal: str, detail: str) -> NotApplicable:
        message = f"Match string '{literal}' : {detail}"
        Log.info(message)
        return NotApplicable(NotApplicableReason.NO_MATCH, message)


def _find_markers(context: str) -> _Markers | None:
    start = context.find(MARKER_START)
    if start == -1:
        return None
    end = context.find(MARKER_END, start + len(MARKER_START))
    if end == -1 or end == start + len(MARKER_START):
        return None
    return _Markers(start=start, end=end)


def _strip_markers(context: str) -> str:
    return context.replace(MARKER_START, "", 1).replace(MARKER_END, "", 1)
