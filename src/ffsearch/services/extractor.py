# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime
from typing import BinaryIO, Optional

from ..domain.errors import ClassificationError, IncompleteMetadataError
from ..domain.models import ClassificationRecord
from ..ports.identity import OwnerResolverPort
from ..ports.metadata import MetadataDecoderPort
from .sniffing import SNIFF_LEN, is_textual, sniff_content_type

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class MetadataExtractor:
    """
    Builds a ClassificationRecord from an open binary file handle:
      - fstat attributes (size, mode, setuid, owner, group, mtime)
      - a content-type label sniffed from the first 512 bytes
      - the binary verdict (label is not text/...)
      - embedded metadata for images, via the decoder port

    Failures never propagate. They are written to `record.error` as a
    "Warn: ..." string and whatever was already populated stays in place.
    The handle position is left wherever extraction stopped; callers that
    read content afterwards must rewind.
    """

    def __init__(
        self,
        owners: Optional[OwnerResolverPort] = None,
        decoder: Optional[MetadataDecoderPort] = None,
    ) -> None:
        self._owners = owners
        self._decoder = decoder

    def extract(self, handle: BinaryIO) -> ClassificationRecord:
        record = ClassificationRecord()
        try:
            self._classify(handle, record)
        except ClassificationError as e:
            record.error = f"Warn: {e}"
            logger.debug("Classification warning for %s: %s", _name(handle), e)
        return record

    def _classify(self, handle: BinaryIO, record: ClassificationRecord) -> None:
        size = None
        try:
            st = os.fstat(handle.fileno())
        except OSError as e:
            logger.debug("fstat failed for %s: %s", _name(handle), e)
            record.error = f"Warn: {e}"
            st = None
        if st is not None:
            size = st.st_size
            record.size = st.st_size
            record.mode = stat.filemode(st.st_mode)
            record.suid = bool(st.st_mode & stat.S_ISUID)
            record.owner = self._describe(st.st_uid, "user")
            record.group = self._describe(st.st_gid, "group")
            record.mod_time = datetime.fromtimestamp(st.st_mtime).strftime(TIME_FORMAT)

        try:
            head = handle.read(SNIFF_LEN if size is None else min(size, SNIFF_LEN))
        except OSError as e:
            raise ClassificationError(e) from e

        record.mime_type = sniff_content_type(head)
        record.is_binary = not is_textual(record.mime_type)

        if record.mime_type.startswith("image/") and self._decoder is not None:
            record.exif_data = self._decode_embedded(handle)

    def _decode_embedded(self, handle: BinaryIO) -> str:
        try:
            handle.seek(0)
            return self._decoder.decode(handle)
        except EOFError as e:
            raise IncompleteMetadataError("EOF reached while reading file") from e
        except Exception as e:
            raise ClassificationError(e) from e

    def _describe(self, ident: int, kind: str) -> str:
        if self._owners is None:
            return str(ident)
        lookup = self._owners.lookup_user if kind == "user" else self._owners.lookup_group
        try:
            return f"{ident} - {lookup(ident)}"
        except LookupError:
            return str(ident)


def _name(handle: BinaryIO) -> str:
    return str(getattr(handle, "name", handle))
