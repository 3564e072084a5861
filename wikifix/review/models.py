from dataclasses import dataclass, field

from wikifix.context.models import ContextSize, ErrorContext
from wikifix.outcomes.models import NotApplicable


@dataclass(frozen=True)
class Document:
    """One article as handed over by ingestion.

    *checked_text* is the text the rule matcher ran on (match offsets refer
    to it); it is normally the anonymized HTML.
    With *text_offsets* set, match offsets refer to the plain text of
    *checked_text* instead, as the rule matcher reports them.
    """

    id: str
    title: str
    language_code: str
    source_text: str
    html: str
    checked_text: str = ""
    stylesheet_url: str | None = None
    text_offsets: bool = False


@dataclass(frozen=True)
class RuleMatch:
    """Error found by the rule matcher, with replacements in preference order."""

    rule_id: str
    message: str
    start: int
    end: int
    replacements: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReviewMaterial:
    """Everything a reviewer needs to accept or refuse one suggestion."""

    rule_id: str
    message: str
    replacement: str
    contexts: dict[ContextSize, ErrorContext]
    original_snippet: str
    corrected_snippet: str
    reconstructed_html: str | None = None

    @property
    def large_context(self) -> str:
        return self.contexts[ContextSize.LARGE].text


ReviewOutcome = ReviewMaterial | NotApplicable


@dataclass(frozen=True)
class BatchEntry:
    """Outcome of one rule match within a batch run."""

    document_id: str
    rule_id: str
    outcome: ReviewOutcome
