"""
Format detection and the public decode/encode entry points.

Two flavours of every operation:
- ``*_result`` functions return a result carrying the feed (or bytes) along
  with structured warnings and errors.
- ``parse``/``parse_rss``/``parse_rdf``/``parse_atom``/``marshal`` never
  report anything: bad input comes back as the zero-value ``Feed`` or ``b""``.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from .encoding import to_utf8
from .formats import get_codec
from .models import EncodeResult, EncodingReport, Feed, FeedFormat, FeedIssue, FeedResult, IssueKind
from .rules import SNIFF_MARKERS

logger = logging.getLogger(__name__)


def locate(raw: bytes) -> Tuple[Optional[FeedFormat], int]:
    """Return the detected format and the offset of its root marker."""
    for name, marker in SNIFF_MARKERS:
        offset = raw.find(marker)
        if offset != -1:
            return FeedFormat(name), offset
    return None, -1


def sniff(raw: bytes) -> Optional[FeedFormat]:
    return locate(raw)[0]


def parse_report(raw: bytes) -> Tuple[FeedResult, Optional[FeedFormat], EncodingReport]:
    data, encoding_report = to_utf8(raw)

    fmt, offset = locate(data)
    if fmt is None:
        logger.debug("No feed root marker in %d bytes", len(raw))
        result = FeedResult(errors=[FeedIssue(
            kind=IssueKind.UNRECOGNIZED_FORMAT,
            message="Input is not an RSS, RDF or Atom document",
        )])
        return result, None, encoding_report

    # Drops BOMs, declarations, comments and stray bytes ahead of the root.
    return get_codec(fmt).decode(data[offset:]), fmt, encoding_report


def parse_result(raw: bytes) -> FeedResult:
    return parse_report(raw)[0]


def parse(raw: bytes) -> Feed:
    return parse_result(raw).feed


def parse_rss(raw: bytes) -> Feed:
    return get_codec(FeedFormat.RSS).decode(raw).feed


def parse_rdf(raw: bytes) -> Feed:
    return get_codec(FeedFormat.RDF).decode(raw).feed


def parse_atom(raw: bytes) -> Feed:
    return get_codec(FeedFormat.ATOM).decode(raw).feed


def marshal_result(feed: Feed, target: Union[FeedFormat, str, None] = None) -> EncodeResult:
    """
    Encode ``feed`` as ``target``, or as the format it was decoded from.

    Sentinel values are written through as element text.
    """
    fmt = target if target is not None else feed.format
    codec = get_codec(fmt)
    if codec is None:
        logger.debug("Cannot encode feed with format %r", fmt)
        return EncodeResult(errors=[FeedIssue(
            kind=IssueKind.UNRECOGNIZED_FORMAT,
            value=str(fmt),
            message="Feed format must be one of rss, rdf, atom",
        )])
    return codec.encode(feed)


def marshal(feed: Feed, target: Union[FeedFormat, str, None] = None) -> bytes:
    return marshal_result(feed, target).data
