from .aggregator import ResultAggregator
from .content_scanner import ContentScanner
from .extractor import MetadataExtractor
from .filters import FilterChain, FilterDecision
from .search_service import SearchService
from .walker import PathWalker, WalkAction


__all__ = [
    'ContentScanner',
    'FilterChain',
    'FilterDecision',
    'MetadataExtractor',
    'PathWalker',
    'ResultAggregator',
    'SearchService',
    'WalkAction',
]
