from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import ClassVar

from lxml import etree

from wikifix.config.settings import Settings
from wikifix.exclusion.exceptions import MetadataParseError
from wikifix.exclusion.jsonpath import JsonPath
from wikifix.exclusion.models import ExclusionMatch, ExclusionRule
from wikifix.logging.logger import Log
from wikifix.markup.parser import local_name


class ExclusionPolicy:
    """Vetoes markup nodes whose metadata matches a configured JSON path.

    Expressions are compiled once; the policy is immutable afterwards and
    may be shared between threads. A language without rules has no policy.
    """

    EDIT_LINK_MARKER: ClassVar[str] = "action=edit"

    def __init__(
        self,
        rules: Mapping[str, Mapping[str, Iterable[str]]] | None = None,
        exclude_edit_links: bool = True,
    ) -> None:
        self._rules: dict[str, dict[str, tuple[JsonPath, ...]]] = {
            language_code: {
                attribute: tuple(JsonPath(expression) for expression in expressions)
                for attribute, expressions in attributes.items()
            }
            for language_code, attributes in (rules or {}).items()
        }
        self._exclude_edit_links = exclude_edit_links

    @classmethod
    def from_settings(cls, settings: Settings) -> ExclusionPolicy:
        return cls(settings.exclusion_rules, exclude_edit_links=settings.exclude_edit_links)

    def rules_for(self, language_code: str) -> list[ExclusionRule]:
        """Configured rules of *language_code*, empty when unconfigured."""
        return [
            ExclusionRule(
                language_code=language_code,
                attribute=attribute,
                expressions=tuple(path.expression for path in paths),
            )
            for attribute, paths in self._rules.get(language_code, {}).items()
        ]

    def check(self, node: etree._Element, language_code: str) -> ExclusionMatch | None:
        """Return the first rule vetoing *node*, or None.

        Raises:
            MetadataParseError: if a configured attribute holds invalid JSON.
        """
        if self._exclude_edit_links and self._is_edit_link(node):
            return ExclusionMatch(
                attribute="href",
                expression=self.EDIT_LINK_MARKER,
                message="Match ignored because it is part of an 'edit' link",
            )

        for attribute, paths in self._rules.get(language_code, {}).items():
            raw_value = node.get(attribute)
            if raw_value is None:
                continue
            metadata = _parse_metadata(raw_value, attribute)
            for path in paths:
                if path.find(metadata):
                    Log.debug(f"Node <{local_name(node)}> excluded by {path.expression}")
                    return ExclusionMatch(
                        attribute=attribute,
                        expression=path.expression,
                        message=(
                            "Match ignored because it matches the following path : "
                            f"{path.expression}"
                        ),
                    )
        return None

    def is_excluded(self, node: etree._Element, language_code: str) -> bool:
        return self.check(node, language_code) is not None

    def _is_edit_link(self, node: etree._Element) -> bool:
        href = node.get("href")
        return local_name(node) == "a" and href is not None and self.EDIT_LINK_MARKER in href


def _parse_metadata(raw_value: str, attribute: str) -> object:
    try:
        return json.loads(raw_value)
    except json.JSONDecodeError as exc:
        raise MetadataParseError(f"Attribute {attribute} is not valid JSON: {exc}") from exc
