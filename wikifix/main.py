import argparse
import json
import sys
from pathlib import Path

from wikifix.config.settings import Settings
from wikifix.exclusion.policy import ExclusionPolicy
from wikifix.logging.logger import Log
from wikifix.review.batch import BatchReviewer
from wikifix.review.exceptions import BatchValidationError
from wikifix.review.loader import load_batch
from wikifix.review.serializers import ReviewSerializer
from wikifix.review.service import build_review_service


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> dependencies -> batch review -> JSON on stdout."""
    parser = argparse.ArgumentParser(
        prog="wikifix",
        description="Build review material for rule matches of wiki articles.",
    )
    parser.add_argument("batch", type=Path, help="JSON file with documents and their matches")
    args = parser.parse_args(argv)

    settings = Settings()
    Log.configure(settings.log_level)

    try:
        items = load_batch(json.loads(args.batch.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, BatchValidationError) as exc:
        Log.error(f"Cannot read batch {args.batch}: {exc}")
        return 1

    reviewer = BatchReviewer(build_review_service(settings), ExclusionPolicy.from_settings(settings))
    serializer = ReviewSerializer()
    entries = reviewer.run(items)
    json.dump(
        [serializer.entry_to_dict(entry) for entry in entries],
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
