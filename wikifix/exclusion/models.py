from dataclasses import dataclass


@dataclass(frozen=True)
class ExclusionRule:
    """JSON-path expressions evaluated against one attribute for one language."""

    language_code: str
    attribute: str
    expressions: tuple[str, ...]


@dataclass(frozen=True)
class ExclusionMatch:
    """The rule that vetoed a node."""

    attribute: str
    expression: str
    message: str
