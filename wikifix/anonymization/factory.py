from wikifix.anonymization.anonymizer import HtmlAnonymizer
from wikifix.anonymization.base import BaseAnonymizer
from wikifix.config.settings import Settings


class AnonymizerFactory:
    """Creates the configured anonymizer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseAnonymizer:
        return HtmlAnonymizer(dropped_tags=settings.dropped_tags)
