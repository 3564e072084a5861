from __future__ import annotations

from lxml import etree

from wikifix.anonymization.models import AnonymizationResult, NodePath
from wikifix.markup.parser import CANONICAL_TAG


class ProvenanceIndex:
    """Reverse lookup from anonymized paths to the original markup identity."""

    def __init__(self, result: AnonymizationResult) -> None:
        self._tags: dict[NodePath, str] = {node.path: node.tag_name for node in result.nodes}
        self._attributes: dict[NodePath, list[tuple[str, str]]] = {}
        for attribute in result.attributes:
            self._attributes.setdefault(attribute.path, []).append(
                (attribute.name, attribute.value)
            )

    def tag_name(self, path: NodePath) -> str:
        """Original tag name at *path*; canonical when nothing was renamed."""
        return self._tags.get(path, CANONICAL_TAG)

    def attributes(self, path: NodePath) -> dict[str, str]:
        """Attributes removed from the element at *path*, in document order."""
        return dict(self._attributes.get(path, []))

    def restore(self, tree: etree._Element) -> etree._Element:
        """Return a copy of an anonymized *tree* with names and attributes put back.

        Subtrees dropped during anonymization are not recoverable.
        """
        restored = etree.fromstring(etree.tostring(tree, with_tail=False))
        self._restore_element(restored, ())
        return restored

    def _restore_element(self, element: etree._Element, path: NodePath) -> None:
        element.tag = self.tag_name(path)
        for name, value in self.attributes(path).items():
            element.set(name, value)
        position = 0
        for child in element:
            if not isinstance(child.tag, str):
                continue
            self._restore_element(child, path + (position,))
            position += 1
