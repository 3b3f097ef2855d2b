from .errors import (
    ClassificationError,
    ConfigurationError,
    FfSearchError,
    IncompleteMetadataError,
    LineTooLongError,
    ScanError,
    WalkError,
)
from .models import (
    ClassificationRecord,
    ContentMatch,
    ContentPattern,
    EntryKind,
    FileResult,
    HexPattern,
    LineMatch,
    MatchTotals,
    TextPattern,
    TraversalEntry,
)
from .options import SearchOptions
from .patterns import PatternSet

__all__ = [
    "ClassificationError",
    "ClassificationRecord",
    "ConfigurationError",
    "ContentMatch",
    "ContentPattern",
    "EntryKind",
    "FfSearchError",
    "FileResult",
    "HexPattern",
    "IncompleteMetadataError",
    "LineMatch",
    "LineTooLongError",
    "MatchTotals",
    "PatternSet",
    "ScanError",
    "SearchOptions",
    "TextPattern",
    "TraversalEntry",
    "WalkError",
]
