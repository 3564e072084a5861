"""Canonicalizing HTML anonymizer.

Processing flow:
1. Parse the markup strictly (malformed input fails the whole call).
2. Read the stylesheet URL from the document head, if any.
3. Walk the tree in pre-order, building a new tree where every element is
   the canonical ``<tag>`` and carries no attribute.
4. Record the original tag name of every renamed element and every removed
   attribute, keyed by the element's child-position path.
5. Return the canonical markup, its tree and the provenance records.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import ClassVar

from lxml import etree

from wikifix.anonymization.base import BaseAnonymizer
from wikifix.anonymization.exceptions import AnonymizationError
from wikifix.anonymization.models import (
    AnonymizationResult,
    AnonymizedAttribute,
    AnonymizedNode,
    NodePath,
)
from wikifix.logging.logger import Log
from wikifix.markup.exceptions import ParseError
from wikifix.markup.parser import CANONICAL_TAG, local_name, parse_markup, serialize_markup


class HtmlAnonymizer(BaseAnonymizer):
    """Deterministic anonymizer: same input, same output and provenance.

    Elements listed in *dropped_tags* are removed together with their
    subtree; the text following them is kept.
    """

    _STYLESHEET_XPATH: ClassVar[str] = (
        "/*[local-name()='html']/*[local-name()='head']"
        "/*[local-name()='link'][@rel='stylesheet']/@href"
    )

    def __init__(self, dropped_tags: Iterable[str] = ("head", "style", "pre")) -> None:
        self._dropped_tags = frozenset(dropped_tags)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def anonymize(
        self,
        html: str | etree._Element,
        source_id: str = "",
    ) -> AnonymizationResult:
        root = parse_markup(html) if isinstance(html, str) else html
        try:
            return self._run(root, source_id)
        except ParseError:
            raise
        except Exception as exc:
            raise AnonymizationError(f"Anonymization failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _run(self, root: etree._Element, source_id: str) -> AnonymizationResult:
        result = AnonymizationResult(
            anonymized_html="",
            stylesheet_url=self._find_stylesheet_url(root),
        )

        canonical_root = self._canonicalize(root, (), source_id, result)
        result.tree = canonical_root
        result.anonymized_html = serialize_markup(canonical_root)

        Log.debug(
            f"Anonymized {source_id or 'markup'}: {len(result.nodes)} tags renamed, "
            f"{len(result.attributes)} attributes removed"
        )
        return result

    def _find_stylesheet_url(self, root: etree._Element) -> str | None:
        hrefs = root.xpath(self._STYLESHEET_XPATH)
        return str(hrefs[0]) if hrefs else None

    def _canonicalize(
        self,
        element: etree._Element,
        path: NodePath,
        source_id: str,
        result: AnonymizationResult,
    ) -> etree._Element:
        """Build the canonical copy of *element*, recording provenance pre-order."""
        tag_name = local_name(element)
        if tag_name != CANONICAL_TAG:
            result.nodes.append(AnonymizedNode(source_id, path, tag_name))
        for name, value in element.attrib.items():
            result.attributes.append(AnonymizedAttribute(path, name, value))

        canonical = etree.Element(CANONICAL_TAG)
        canonical.text = element.text

        position = 0
        for child in element:
            if not isinstance(child.tag, str):
                # comment or processing instruction, copied with its tail
                canonical.append(copy.copy(child))
                continue
            if local_name(child) in self._dropped_tags:
                _append_text(canonical, child.tail)
                continue
            canonical_child = self._canonicalize(child, path + (position,), source_id, result)
            canonical_child.tail = child.tail
            canonical.append(canonical_child)
            position += 1

        return canonical


def _append_text(parent: etree._Element, text: str | None) -> None:
    """Append *text* after the last child of *parent* (or to its text)."""
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text
