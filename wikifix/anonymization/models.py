from dataclasses import dataclass, field

from lxml import etree

NodePath = tuple[int, ...]


@dataclass(frozen=True)
class AnonymizedNode:
    """Original identity of an element renamed to the canonical tag."""

    source_id: str  # document the node came from
    path: NodePath  # child positions from the root, root is ()
    tag_name: str  # original local tag name, e.g. "div"


@dataclass(frozen=True)
class AnonymizedAttribute:
    """Attribute removed from the element at *path*."""

    path: NodePath
    name: str
    value: str


@dataclass
class AnonymizationResult:
    """Output of one anonymization run."""

    anonymized_html: str
    tree: etree._Element | None = None
    nodes: list[AnonymizedNode] = field(default_factory=list)
    attributes: list[AnonymizedAttribute] = field(default_factory=list)
    stylesheet_url: str | None = None


@dataclass(frozen=True)
class Segment:
    """Run of anonymized markup: either a canonical tag or the text between tags."""

    text: str
    is_markup: bool
    offset: int  # start of the run in the anonymized markup
