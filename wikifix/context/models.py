from dataclasses import dataclass
from enum import Enum

MARKER_START = "<err>"
MARKER_END = "</err>"


class ContextSize(str, Enum):
    SMALL = "small"
    STANDARD = "standard"
    LARGE = "large"


@dataclass(frozen=True)
class ErrorContext:
    """Marker-delimited text window around an error span."""

    start: int
    end: int
    text: str
    size: ContextSize
