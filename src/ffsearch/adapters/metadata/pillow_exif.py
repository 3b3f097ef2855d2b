# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import json
import logging
from typing import BinaryIO

from PIL import ExifTags, Image

from ...ports.metadata import MetadataDecoderPort

logger = logging.getLogger(__name__)


class PillowExifDecoder(MetadataDecoderPort):
    """
    EXIF summary via Pillow. Returns a JSON object keyed by tag name
    (sorted, so output is stable), or "" when the image carries no EXIF.

    EOFError from Pillow is left to propagate; the extractor reports it as
    incomplete metadata.
    """

    def name(self) -> str:
        return "exif"

    def decode(self, stream: BinaryIO) -> str:
        with Image.open(stream) as im:
            exif = im.getexif()
            if not exif:
                return ""
            summary = {
                ExifTags.TAGS.get(tag, str(tag)): self._plain(value)
                for tag, value in exif.items()
            }
        logger.debug("Decoded %d EXIF tags", len(summary))
        return json.dumps(summary, sort_keys=True, ensure_ascii=False, default=str)

    @staticmethod
    def _plain(value):
        if isinstance(value, bytes):
            return value.decode("latin-1").rstrip("\x00")
        return value
