from __future__ import annotations

from dataclasses import dataclass, field

from wikifix.config.settings import Settings
from wikifix.exclusion.policy import ExclusionPolicy


@dataclass(frozen=True)
class ReviewConfig:
    """Per-call configuration: one document, one language, one review session."""

    language_code: str
    stylesheet_url: str | None = None
    policy: ExclusionPolicy = field(default_factory=ExclusionPolicy)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        language_code: str,
        stylesheet_url: str | None = None,
    ) -> ReviewConfig:
        return cls(
            language_code=language_code,
            stylesheet_url=stylesheet_url,
            policy=ExclusionPolicy.from_settings(settings),
        )
