from collections.abc import Iterable

from wikifix.config.review_config import ReviewConfig
from wikifix.exclusion.policy import ExclusionPolicy
from wikifix.logging.logger import Log
from wikifix.markup.exceptions import ParseError
from wikifix.markup.parser import parse_markup
from wikifix.outcomes.models import NotApplicable
from wikifix.review.models import BatchEntry, Document, RuleMatch
from wikifix.review.service import ReviewService


class BatchReviewer:
    """Runs every match of every document, skipping documents that fail to parse."""

    def __init__(self, service: ReviewService, policy: ExclusionPolicy) -> None:
        self._service = service
        self._policy = policy

    def run(self, items: Iterable[tuple[Document, list[RuleMatch]]]) -> list[BatchEntry]:
        entries: list[BatchEntry] = []
        for document, matches in items:
            try:
                entries.extend(self._run_document(document, matches))
            except ParseError as exc:
                Log.error(f"Document {document.id} skipped: {exc}")

        refused = sum(isinstance(entry.outcome, NotApplicable) for entry in entries)
        Log.info(f"Batch done: {len(entries)} matches reviewed, {refused} not applicable")
        return entries

    def _run_document(self, document: Document, matches: list[RuleMatch]) -> list[BatchEntry]:
        """Review all *matches* of one document; the HTML is parsed once."""
        document = self._service.prepare(document)
        tree = parse_markup(document.html)
        config = ReviewConfig(
            language_code=document.language_code,
            stylesheet_url=document.stylesheet_url,
            policy=self._policy,
        )
        Log.info(f"Reviewing {len(matches)} matches of document {document.id}")
        annotated = self._service.annotate(document) if document.text_offsets else None

        entries: list[BatchEntry] = []
        for match in matches:
            try:
                if annotated is not None:
                    match = self._service.to_markup_match(annotated, match)
                outcome = self._service.build_review_material(document, match, config, tree=tree)
            except ValueError as exc:
                Log.warning(f"Document {document.id}, rule {match.rule_id} skipped: {exc}")
                continue
            entries.append(BatchEntry(document.id, match.rule_id, outcome))
        return entries
