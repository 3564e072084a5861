from dataclasses import dataclass
from enum import Enum


class NotApplicableReason(str, Enum):
    """Why a suggestion cannot be handled automatically."""

    NO_MATCH = "no-match"
    MULTIPLE_MATCHES = "multiple-matches"
    EXCLUSION_MATCHED = "exclusion-matched"
    CONTEXT_TOO_LARGE = "context-too-large"
    NO_SUGGESTION = "no-suggestion"
    PLACEHOLDER_SUGGESTION = "placeholder-suggestion"
    ERROR_IN_TITLE = "error-in-title"


@dataclass(frozen=True)
class NotApplicable:
    """Expected, content-related refusal. Returned as a value, never raised.

    *message* is shown verbatim in review tooling; *expression* is set for
    exclusion vetoes only.
    """

    reason: NotApplicableReason
    message: str = ""
    expression: str | None = None

    @property
    def text(self) -> str:
        return self.message or self.reason.value
