from typing import ClassVar

from wikifix.context.models import ContextSize
from wikifix.correlation.models import Corrected, CorrelationResult
from wikifix.outcomes.models import NotApplicable
from wikifix.review.models import BatchEntry, ReviewMaterial, ReviewOutcome


class ReviewSerializer:
    """Converts review values to JSON-ready dicts with string fields."""

    NOT_APPLICABLE_STATUS: ClassVar[int] = 422

    def material_to_dict(self, material: ReviewMaterial) -> dict[str, str]:
        payload = {
            "ruleId": material.rule_id,
            "message": material.message,
            "suggestion": material.replacement,
            "smallContext": material.contexts[ContextSize.SMALL].text,
            "context": material.contexts[ContextSize.STANDARD].text,
            "largeContext": material.contexts[ContextSize.LARGE].text,
            "originalWikitext": material.original_snippet,
            "suggestedWikitext": material.corrected_snippet,
        }
        if material.reconstructed_html is not None:
            payload["htmlContext"] = material.reconstructed_html
        return payload

    def correction_to_dict(self, corrected: Corrected) -> dict[str, str]:
        return {
            "originalWikitext": corrected.original_snippet,
            "suggestedWikitext": corrected.corrected_snippet,
        }

    def error_to_dict(self, outcome: NotApplicable) -> dict[str, str]:
        return {"error": outcome.text}

    def outcome_to_dict(self, outcome: ReviewOutcome | CorrelationResult) -> dict[str, str]:
        if isinstance(outcome, NotApplicable):
            return self.error_to_dict(outcome)
        if isinstance(outcome, Corrected):
            return self.correction_to_dict(outcome)
        return self.material_to_dict(outcome)

    def entry_to_dict(self, entry: BatchEntry) -> dict[str, str]:
        return {
            "documentId": entry.document_id,
            "ruleId": entry.rule_id,
            **self.outcome_to_dict(entry.outcome),
        }

    def status_code(self, outcome: ReviewOutcome | CorrelationResult) -> int:
        """HTTP status for *outcome*: refusals are client errors."""
        return self.NOT_APPLICABLE_STATUS if isinstance(outcome, NotApplicable) else 200
