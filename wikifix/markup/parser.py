from lxml import etree

from wikifix.markup.exceptions import MarkupParseError

CANONICAL_TAG = "tag"


def parse_markup(markup: str) -> etree._Element:
    """Parse *markup* strictly and return its root element.

    A new parser is built for every call so concurrent callers never share
    parser state.

    Raises:
        MarkupParseError: if the markup is empty or not well-formed.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(markup, parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise MarkupParseError(f"Malformed markup: {exc}") from exc
    if root is None:
        raise MarkupParseError("Malformed markup: document is empty")
    return root


def serialize_markup(element: etree._Element) -> str:
    """Serialize *element* (without its tail) to a markup string."""
    return etree.tostring(element, encoding="unicode", with_tail=False)


def local_name(element: etree._Element) -> str:
    """Tag name of *element* without any namespace."""
    return etree.QName(element).localname
