from wikifix.markup.exceptions import ParseError


class ExclusionError(Exception):
    """Base exception for exclusion policy configuration problems."""


class JsonPathSyntaxError(ExclusionError):
    """Raised when a configured JSON-path expression cannot be compiled."""


class MetadataParseError(ParseError):
    """Raised when a node's metadata attribute is not valid JSON."""
