from .identity import OwnerResolverPort
from .ignore import IgnoreMatcherPort
from .listener import SearchListener
from .metadata import MetadataDecoderPort

__all__ = ["IgnoreMatcherPort", "MetadataDecoderPort", "OwnerResolverPort", "SearchListener"]
