from __future__ import annotations

import copy

from lxml import etree

from wikifix.config.review_config import ReviewConfig
from wikifix.logging.logger import Log
from wikifix.markup.parser import local_name, serialize_markup
from wikifix.outcomes.models import NotApplicable, NotApplicableReason
from wikifix.reconstruction.models import Fragment, ReconstructionResult

_TEXT_CONTAINING_XPATH = "//text()[contains(., $literal)]"


def locate_text_nodes(tree: etree._Element, literal: str) -> list[etree._ElementUnicodeResult]:
    """Every text node of *tree* containing *literal*, in document order."""
    if not literal:
        return []
    return list(tree.xpath(_TEXT_CONTAINING_XPATH, literal=literal))


def text_parent(text_node: etree._ElementUnicodeResult) -> etree._Element:
    """Element that contains *text_node* (lxml attaches tails to the previous sibling)."""
    owner = text_node.getparent()
    parent = owner if text_node.is_text else owner.getparent()
    if parent is None:
        raise ValueError("Text node has no parent element")
    return parent


class MarkupReconstructor:
    """Rebuilds the minimal markup around an error, from its text node up to the root.

    Every element on the way up is checked against the exclusion policy; a
    veto at any level ends the climb immediately.
    """

    def reconstruct(
        self,
        text_node: etree._ElementUnicodeResult,
        config: ReviewConfig,
    ) -> ReconstructionResult:
        parent = text_parent(text_node)
        vetoed = self._check(parent, config)
        if vetoed is not None:
            return vetoed

        fragment = copy.deepcopy(parent)
        fragment.tail = None
        return self._climb(parent.getparent(), fragment, config)

    def _climb(
        self,
        node: etree._Element | None,
        fragment: etree._Element,
        config: ReviewConfig,
    ) -> ReconstructionResult:
        if node is None:
            return Fragment(html=serialize_markup(fragment))

        vetoed = self._check(node, config)
        if vetoed is not None:
            return vetoed

        element = etree.Element(node.tag, nsmap=node.nsmap)
        if local_name(node) == "html" and config.stylesheet_url:
            head = etree.SubElement(element, "head")
            link = etree.SubElement(head, "link")
            link.set("rel", "stylesheet")
            link.set("href", config.stylesheet_url)
        element.append(fragment)
        for name, value in node.attrib.items():
            element.set(name, value)

        return self._climb(node.getparent(), element, config)

    def _check(self, node: etree._Element, config: ReviewConfig) -> NotApplicable | None:
        match = config.policy.check(node, config.language_code)
        if match is None:
            return None
        Log.info(match.message)
        return NotApplicable(
            NotApplicableReason.EXCLUSION_MATCHED,
            match.message,
            expression=match.expression,
        )
