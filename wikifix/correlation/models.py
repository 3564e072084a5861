from dataclasses import dataclass

from wikifix.outcomes.models import NotApplicable


@dataclass(frozen=True)
class Corrected:
    """The literal found once in the source, its corrected form and the rewritten source."""

    original_snippet: str
    corrected_snippet: str
    corrected_text: str


CorrelationResult = Corrected | NotApplicable
