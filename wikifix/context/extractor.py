from __future__ import annotations

import re

from wikifix.config.settings import Settings
from wikifix.context.models import MARKER_END, MARKER_START, ContextSize, ErrorContext
from wikifix.outcomes.models import NotApplicable, NotApplicableReason

# Suggestions like "(enter year)" expect manual input.
_PLACEHOLDER_RE = re.compile(r"\(.+\)")


def extract_context(text: str, from_pos: int, to_pos: int, radius: int) -> str:
    """Return the window of *radius* characters around ``text[from_pos:to_pos]``.

    The error span is wrapped in ``<err>``/``</err>``; the window is clipped
    at both ends of *text*.

    Raises:
        ValueError: if the offsets do not describe a span of *text*.
    """
    if not 0 <= from_pos <= to_pos <= len(text):
        raise ValueError(
            f"Invalid error span {from_pos}..{to_pos} for text of length {len(text)}"
        )
    if radius < 0:
        raise ValueError(f"Context radius must not be negative: {radius}")

    window_start = max(0, from_pos - radius)
    window_end = min(len(text), to_pos + radius)
    return (
        text[window_start:from_pos]
        + MARKER_START
        + text[from_pos:to_pos]
        + MARKER_END
        + text[to_pos:window_end]
    )


def is_usable_suggestion(replacement: str) -> bool:
    """False for placeholders wrapped in parentheses; an empty deletion is usable."""
    return _PLACEHOLDER_RE.fullmatch(replacement) is None


class ContextExtractor:
    """Builds the small, standard and large contexts of a rule match."""

    def __init__(self, settings: Settings) -> None:
        self._radii = {
            ContextSize.SMALL: settings.small_context_radius,
            ContextSize.STANDARD: settings.standard_context_radius,
            ContextSize.LARGE: settings.large_context_radius,
        }
        self._max_length = settings.max_context_length

    def extract(
        self,
        text: str,
        from_pos: int,
        to_pos: int,
        size: ContextSize,
    ) -> ErrorContext | NotApplicable:
        """Build one context; non-small contexts longer than the cap are refused.

        Non-small radii shrink so the marked window fits the cap; only an
        error span that alone exceeds it is refused.
        """
        marked = extract_context(text, from_pos, to_pos, self._radius(size, to_pos - from_pos))
        if size is not ContextSize.SMALL and len(marked) > self._max_length:
            return NotApplicable(
                NotApplicableReason.CONTEXT_TOO_LARGE,
                f"{size.value} context is {len(marked)} characters long "
                f"(limit {self._max_length})",
            )
        return ErrorContext(start=from_pos, end=to_pos, text=marked, size=size)

    def extract_all(
        self,
        text: str,
        from_pos: int,
        to_pos: int,
    ) -> dict[ContextSize, ErrorContext] | NotApplicable:
        """Build every context size, or the first refusal."""
        contexts: dict[ContextSize, ErrorContext] = {}
        for size in ContextSize:
            context = self.extract(text, from_pos, to_pos, size)
            if isinstance(context, NotApplicable):
                return context
            contexts[size] = context
        return contexts

    def _radius(self, size: ContextSize, span_length: int) -> int:
        radius = self._radii[size]
        if size is ContextSize.SMALL:
            return radius
        room = self._max_length - len(MARKER_START) - len(MARKER_END) - span_length
        return max(0, min(radius, room // 2))
