class ParseError(Exception):
    """Base exception for input that cannot be parsed.

    Fatal for the current document only: callers skip the document and log.
    """


class MarkupParseError(ParseError):
    """Raised when document markup is not well-formed."""
