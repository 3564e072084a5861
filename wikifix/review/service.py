from __future__ import annotations

import dataclasses

from lxml import etree

from wikifix.anonymization.annotated import AnnotatedText, annotate
from wikifix.anonymization.base import BaseAnonymizer
from wikifix.anonymization.factory import AnonymizerFactory
from wikifix.config.review_config import ReviewConfig
from wikifix.config.settings import Settings
from wikifix.context.extractor import ContextExtractor, is_usable_suggestion
from wikifix.context.models import ContextSize
from wikifix.correlation.correlator import WikitextCorrelator
from wikifix.correlation.models import CorrelationResult
from wikifix.logging.logger import Log
from wikifix.markup.parser import parse_markup
from wikifix.outcomes.models import NotApplicable, NotApplicableReason
from wikifix.reconstruction.reconstructor import MarkupReconstructor, locate_text_nodes
from wikifix.review.models import Document, ReviewMaterial, ReviewOutcome, RuleMatch


class ReviewService:
    """Builds review material for rule matches and re-applies accepted suggestions.

    Flow of ``build_review_material``:
    check suggestion -> extract contexts -> correlate with source ->
    reconstruct HTML fragment.
    """

    def __init__(
        self,
        anonymizer: BaseAnonymizer,
        extractor: ContextExtractor,
        correlator: WikitextCorrelator,
        reconstructor: MarkupReconstructor,
    ) -> None:
        self._anonymizer = anonymizer
        self._extractor = extractor
        self._correlator = correlator
        self._reconstructor = reconstructor

    def prepare(self, document: Document) -> Document:
        """Fill in the checked text and stylesheet URL from the document's HTML.

        Raises:
            MarkupParseError: if the HTML is not well-formed.
        """
        if document.checked_text and document.stylesheet_url is not None:
            return document
        result = self._anonymizer.anonymize(document.html, source_id=document.id)
        return dataclasses.replace(
            document,
            checked_text=document.checked_text or result.anonymized_html,
            stylesheet_url=(
                document.stylesheet_url
                if document.stylesheet_url is not None
                else result.stylesheet_url
            ),
        )

    def annotate(self, document: Document) -> AnnotatedText:
        """Text and markup runs of the document's checked text.

        The plain text is what a rule matcher should check; ``to_markup_match``
        maps its offsets back.
        """
        return annotate(self.prepare(document).checked_text)

    def to_markup_match(self, annotated: AnnotatedText, match: RuleMatch) -> RuleMatch:
        """Copy of *match* with plain-text offsets mapped onto the markup.

        Raises:
            ValueError: if the offsets lie outside the plain text.
        """
        start, end = annotated.markup_span(match.start, match.end)
        return dataclasses.replace(match, start=start, end=end)

    def build_review_material(
        self,
        document: Document,
        match: RuleMatch,
        config: ReviewConfig,
        tree: etree._Element | None = None,
    ) -> ReviewOutcome:
        """Review material for *match*, or the reason it can't be handled.

        *tree* is the parsed original HTML; it is parsed from the document
        when not given.

        Raises:
            ParseError: if the document HTML or a metadata attribute is malformed.
        """
        subject = f"Article {document.title}"

        # Step 1: only the first candidate is offered, and only if usable
        if not match.replacements:
            outcome = NotApplicable(
                NotApplicableReason.NO_SUGGESTION,
                f"Rule {match.rule_id} offers no replacement",
            )
            Log.skipped(subject, outcome.reason.value, outcome.text)
            return outcome
        replacement = match.replacements[0]
        if not is_usable_suggestion(replacement):
            outcome = NotApplicable(
                NotApplicableReason.PLACEHOLDER_SUGGESTION,
                f"Suggestion '{replacement}' needs manual input",
            )
            Log.skipped(subject, outcome.reason.value, outcome.text)
            return outcome

        # Step 2: contexts at every radius
        contexts = self._extractor.extract_all(document.checked_text, match.start, match.end)
        if isinstance(contexts, NotApplicable):
            Log.skipped(subject, contexts.reason.value, contexts.text)
            return contexts
        large_context = contexts[ContextSize.LARGE].text

        # Step 3: the suggestion must map onto exactly one place in the source
        correlation = self._correlate(document, large_context, replacement)
        if isinstance(correlation, NotApplicable):
            Log.skipped(subject, correlation.reason.value, correlation.text)
            return correlation

        # Step 4: HTML preview, only when the literal sits in a single text node
        if tree is None:
            tree = parse_markup(document.html)
        reconstructed_html = None
        text_nodes = locate_text_nodes(tree, correlation.original_snippet)
        if len(text_nodes) == 1:
            fragment = self._reconstructor.reconstruct(text_nodes[0], config)
            if isinstance(fragment, NotApplicable):
                Log.skipped(subject, fragment.reason.value, fragment.text)
                return fragment
            reconstructed_html = fragment.html
        else:
            Log.info(
                f"{subject} : {len(text_nodes)} HTML text nodes contain "
                f"'{correlation.original_snippet}', no HTML context"
            )

        return ReviewMaterial(
            rule_id=match.rule_id,
            message=match.message,
            replacement=replacement,
            contexts=contexts,
            original_snippet=correlation.original_snippet,
            corrected_snippet=correlation.corrected_snippet,
            reconstructed_html=reconstructed_html,
        )

    def apply(
        self,
        document: Document,
        material: ReviewMaterial,
        replacement: str | None = None,
    ) -> CorrelationResult:
        """Rewrite the document source with an accepted suggestion.

        *document* should carry the current source text; the stored large
        context is correlated against it again.
        """
        chosen = material.replacement if replacement is None else replacement
        if not is_usable_suggestion(chosen):
            return NotApplicable(
                NotApplicableReason.PLACEHOLDER_SUGGESTION,
                f"Suggestion '{chosen}' needs manual input",
            )
        result = self._correlate(document, material.large_context, chosen)
        if isinstance(result, NotApplicable):
            Log.skipped(f"Article {document.title}", result.reason.value, result.text)
        else:
            Log.info(f"Article {document.title} : applied '{result.corrected_snippet}'")
        return result

    def _correlate(
        self,
        document: Document,
        marked_context: str,
        suggestion: str,
    ) -> CorrelationResult:
        if self._correlator.overlaps_title(marked_context, document.title):
            return NotApplicable(
                NotApplicableReason.ERROR_IN_TITLE,
                f"Match string '{self._correlator.literal(marked_context)}' "
                "is included in the article's title",
            )
        return self._correlator.correlate(document.source_text, marked_context, suggestion)


def build_review_service(settings: Settings) -> ReviewService:
    """Build a ReviewService with all required collaborators."""
    return ReviewService(
        anonymizer=AnonymizerFactory.create(settings),
        extractor=ContextExtractor(settings),
        correlator=WikitextCorrelator(),
        reconstructor=MarkupReconstructor(),
    )
