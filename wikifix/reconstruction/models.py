from dataclasses import dataclass

from wikifix.outcomes.models import NotApplicable


@dataclass(frozen=True)
class Fragment:
    """Smallest standalone markup showing the error in its original nesting."""

    html: str


ReconstructionResult = Fragment | NotApplicable
