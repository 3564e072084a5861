from abc import ABC, abstractmethod

from lxml import etree

from wikifix.anonymization.models import AnonymizationResult


class BaseAnonymizer(ABC):
    """Contract for markup anonymizers."""

    @abstractmethod
    def anonymize(
        self,
        html: str | etree._Element,
        source_id: str = "",
    ) -> AnonymizationResult:
        """Reduce markup to its canonical, attribute-free shape.

        Args:
            html: Markup string, or an already parsed root element (left
                  untouched).
            source_id: Identifier of the source document, copied into every
                       node provenance record.

        Returns:
            AnonymizationResult with the canonical markup, its tree and the
            provenance of every renamed tag and removed attribute.

        Raises:
            MarkupParseError: if the markup is not well-formed.
            AnonymizationError: on any other failure.
        """
