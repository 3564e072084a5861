from wikifix.review.batch import BatchReviewer
from wikifix.review.serializers import ReviewSerializer
from wikifix.review.service import ReviewService, build_review_service

__all__ = ["BatchReviewer", "ReviewSerializer", "ReviewService", "build_review_service"]
