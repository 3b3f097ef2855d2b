# Licensed under the Apache License, Version 2.0


class FfSearchError(Exception):
    """Base exception for domain-specific errors."""


class ConfigurationError(FfSearchError):
    """Bad CLI args or unusable patterns (e.g., a regex that does not compile)."""


class WalkError(FfSearchError):
    """The walk root cannot be read. Fatal to the invocation."""


class ClassificationError(FfSearchError):
    """Stat, sniff-read or embedded-metadata failures while classifying a file."""


class IncompleteMetadataError(ClassificationError):
    """Embedded metadata ended before the decoder was done with it."""


class ScanError(FfSearchError):
    """Problems while scanning one file's content; aborts that file only."""


class LineTooLongError(ScanError):
    """A line exceeded the scanner's buffer."""
