# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from typing import BinaryIO, Protocol


class MetadataDecoderPort(Protocol):
    """
    Embedded-metadata extraction (EXIF and friends) for image-like files.
    Implementers may raise EOFError on truncated input; any other exception
    is treated as a generic decode failure by the caller.
    """

    def name(self) -> str: ...

    def decode(self, stream: BinaryIO) -> str:
        """Return a textual summary of the embedded metadata, or "" if there is none."""
        ...
