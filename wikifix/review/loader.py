"""Builds batch items from a JSON payload.

Expected shape::

    {"documents": [{"id": ..., "title": ..., "language_code": ...,
                    "source_text": ..., "html": ..., "checked_text"?: ...,
                    "stylesheet_url"?: ..., "text_offsets"?: ...,
                    "matches": [{"rule_id": ..., "message": ..., "start": ...,
                                 "end": ..., "replacements": [...]}]}]}
"""

from typing import Any

from wikifix.review.exceptions import BatchValidationError
from wikifix.review.models import Document, RuleMatch

_DOCUMENT_FIELDS = ("id", "title", "language_code", "source_text", "html")


def load_batch(data: dict[str, Any]) -> list[tuple[Document, list[RuleMatch]]]:
    """Validate *data* and build (document, matches) pairs.

    Raises:
        BatchValidationError: on any validation failure.
    """
    documents = data.get("documents") if isinstance(data, dict) else None
    if not isinstance(documents, list):
        raise BatchValidationError("'documents' must be a list")
    return [_build_item(raw, i) for i, raw in enumerate(documents)]


def _build_item(raw: Any, index: int) -> tuple[Document, list[RuleMatch]]:
    if not isinstance(raw, dict):
        raise BatchValidationError(f"documents[{index}] must be an object")
    for field in _DOCUMENT_FIELDS:
        if not isinstance(raw.get(field), str):
            raise BatchValidationError(f"documents[{index}].{field} must be a string")

    stylesheet_url = raw.get("stylesheet_url")
    if stylesheet_url is not None and not isinstance(stylesheet_url, str):
        raise BatchValidationError(f"documents[{index}].stylesheet_url must be a string or null")

    text_offsets = raw.get("text_offsets", False)
    if not isinstance(text_offsets, bool):
        raise BatchValidationError(f"documents[{index}].text_offsets must be a boolean")

    document = Document(
        id=raw["id"],
        title=raw["title"],
        language_code=raw["language_code"],
        source_text=raw["source_text"],
        html=raw["html"],
        checked_text=raw.get("checked_text") or "",
        stylesheet_url=stylesheet_url,
        text_offsets=text_offsets,
    )
    raw_matches = raw.get("matches", [])
    if not isinstance(raw_matches, list):
        raise BatchValidationError(f"documents[{index}].matches must be a list")
    return document, [_build_match(item, index, i) for i, item in enumerate(raw_matches)]


def _build_match(raw: Any, doc_index: int, index: int) -> RuleMatch:
    where = f"documents[{doc_index}].matches[{index}]"
    if not isinstance(raw, dict):
        raise BatchValidationError(f"{where} must be an object")
    start, end = raw.get("start"), raw.get("end")
    if not isinstance(start, int) or not isinstance(end, int) or start > end:
        raise BatchValidationError(f"{where} needs integer offsets with start <= end")
    replacements = raw.get("replacements", [])
    if not isinstance(replacements, list) or not all(isinstance(r, str) for r in replacements):
        raise BatchValidationError(f"{where}.replacements must be a list of strings")
    return RuleMatch(
        rule_id=str(raw.get("rule_id", "")),
        message=str(raw.get("message", "")),
        start=start,
        end=end,
        replacements=replacements,
    )
