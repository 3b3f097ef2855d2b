# Licensed under the Apache License, Version 2.0
"""Content-type sniffing from the leading bytes of a file."""

from __future__ import annotations

import filetype

SNIFF_LEN = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_BOMS = (
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
)

# Tags that mark a document as HTML when they open it (after whitespace).
_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)

_WS = b"\t\n\x0c\r "

# Control bytes that never occur in text.
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _markup_type(head: bytes) -> str:
    body = head.lstrip(_WS)
    upper = body.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag):
            rest = body[len(tag):len(tag) + 1]
            if rest in (b" ", b">"):
                return "text/html; charset=utf-8"
    if body.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    return ""


def sniff_content_type(head: bytes) -> str:
    """
    Guess a content-type label from at most SNIFF_LEN leading bytes, ignoring
    the filename. Falls back to text/plain when no control bytes are present
    and to application/octet-stream otherwise. An empty buffer is text.
    """
    head = head[:SNIFF_LEN]
    if not head:
        return TEXT_PLAIN

    for bom, label in _BOMS:
        if head.startswith(bom):
            return label

    markup = _markup_type(head)
    if markup:
        return markup

    kind = filetype.guess(head)
    if kind is not None:
        return kind.mime

    if any(b in _BINARY_BYTES for b in head):
        return OCTET_STREAM
    return TEXT_PLAIN


def is_textual(label: str) -> bool:
    return label.startswith("text/")
