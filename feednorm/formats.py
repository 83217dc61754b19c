"""
Per-format codecs.

Each codec decodes wire bytes into its schema and projects that onto the
unified ``Feed``, and builds the schema back from a ``Feed`` to encode it.

Missing-field policy (decode, every string field at feed and item level):
- strip surrounding whitespace
- an empty result becomes ``N/A``

Timestamps:
- RSS/RDF text is passed through untouched in both directions.
- Atom values are converted RFC 3339 <-> canonical; a value that does not
  parse becomes the zero timestamp and is reported as a warning.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type, Union

from lxml import etree

from . import dates, xmltree
from .models import EncodeResult, Feed, FeedFormat, FeedIssue, FeedResult, IssueKind, Item
from .rules import NOT_AVAILABLE
from .schemas import (
    AtomEntry,
    AtomFeed,
    AtomLink,
    RDFChannel,
    RDFDocument,
    RSSChannel,
    RSSDocument,
    RSSItem,
)
from .xmltree import SerializationError, XmlModel

logger = logging.getLogger(__name__)


def present(value: str) -> str:
    value = value.strip()
    return value if value else NOT_AVAILABLE


def _timestamp_issue(field: str, value: str, expected: str) -> FeedIssue:
    return FeedIssue(
        kind=IssueKind.TIMESTAMP_PARSE_FAILURE,
        field=field,
        value=value,
        message=f"Not a {expected} timestamp; replaced with the zero timestamp",
    )


def _from_zoned(value: str, field: str, warnings: List[FeedIssue]) -> str:
    value = present(value)
    if value == NOT_AVAILABLE:
        return value
    if not dates.is_zoned(value):
        warnings.append(_timestamp_issue(field, value, "RFC 3339"))
    return dates.zoned_to_canonical(value)


def _to_zoned(value: str, field: str, warnings: List[FeedIssue]) -> str:
    if not dates.is_canonical(value):
        warnings.append(_timestamp_issue(field, value, "canonical"))
    return dates.canonical_to_zoned(value)


def _rss_items(items: List[RSSItem]) -> List[Item]:
    return [
        Item(
            hyperlink=present(item.link),
            title=present(item.title),
            published=present(item.pub_date),
            updated=NOT_AVAILABLE,
        )
        for item in items
    ]


def _rss_schema_items(items: List[Item]) -> List[RSSItem]:
    return [RSSItem(title=i.title, link=i.hyperlink, pub_date=i.published) for i in items]


class FormatCodec(ABC):
    """Decode/encode capability for one wire format."""

    format: FeedFormat
    schema: Type[XmlModel]
    check_root: bool = True

    @abstractmethod
    def project(self, doc, warnings: List[FeedIssue]) -> Feed:
        """Map a decoded schema structure onto the unified model."""

    @abstractmethod
    def build(self, feed: Feed, warnings: List[FeedIssue]) -> XmlModel:
        """Map the unified model onto a schema structure."""

    def decode(self, raw: bytes) -> FeedResult:
        name = self.format.value
        try:
            root = xmltree.fromstring(raw)
        except (etree.XMLSyntaxError, ValueError) as e:
            logger.debug("Could not parse %s document: %s", name, e)
            return FeedResult(errors=[FeedIssue(
                kind=IssueKind.UNPARSEABLE_INPUT,
                message=f"Invalid {name} document: {e}",
            )])

        expected = xmltree.local_name(self.schema.xml_tag)
        found = xmltree.local_name(root.tag)
        if self.check_root and found != expected:
            logger.debug("Expected <%s> root for %s, got <%s>", expected, name, found)
            return FeedResult(errors=[FeedIssue(
                kind=IssueKind.UNPARSEABLE_INPUT,
                value=found,
                message=f"Invalid {name} document: root element is <{found}>, expected <{expected}>",
            )])

        warnings: List[FeedIssue] = []
        doc = xmltree.unmarshal(self.schema, root)
        return FeedResult(feed=self.project(doc, warnings), warnings=warnings)

    def encode(self, feed: Feed) -> EncodeResult:
        warnings: List[FeedIssue] = []
        doc = self.build(feed, warnings)
        try:
            data = xmltree.tostring(doc)
        except SerializationError as e:
            logger.warning("Failed to serialize %s feed: %s", self.format.value, e)
            return EncodeResult(warnings=warnings, errors=[FeedIssue(
                kind=IssueKind.SERIALIZATION_FAILURE,
                message=str(e),
            )])
        return EncodeResult(data=data, warnings=warnings)


class RSSCodec(FormatCodec):
    format = FeedFormat.RSS
    schema = RSSDocument
    check_root = False  # any root holding a <channel> decodes

    def project(self, doc: RSSDocument, warnings: List[FeedIssue]) -> Feed:
        channel = doc.channel
        return Feed(
            format=self.format,
            hyperlink=present(channel.link),
            title=present(channel.title),
            description=present(channel.description),
            published=present(channel.pub_date),
            updated=present(channel.last_build_date),
            author=NOT_AVAILABLE,
            items=_rss_items(channel.items),
        )

    def build(self, feed: Feed, warnings: List[FeedIssue]) -> RSSDocument:
        return RSSDocument(channel=RSSChannel(
            title=feed.title,
            link=feed.hyperlink,
            description=feed.description,
            pub_date=feed.published,
            last_build_date=feed.updated,
            items=_rss_schema_items(feed.items),
        ))


class RDFCodec(FormatCodec):
    format = FeedFormat.RDF
    schema = RDFDocument

    def project(self, doc: RDFDocument, warnings: List[FeedIssue]) -> Feed:
        return Feed(
            format=self.format,
            hyperlink=present(doc.channel.link),
            title=present(doc.channel.title),
            description=present(doc.channel.description),
            published=NOT_AVAILABLE,
            updated=NOT_AVAILABLE,
            author=NOT_AVAILABLE,
            items=_rss_items(doc.items),
        )

    def build(self, feed: Feed, warnings: List[FeedIssue]) -> RDFDocument:
        return RDFDocument(
            channel=RDFChannel(
                title=feed.title,
                link=feed.hyperlink,
                description=feed.description,
            ),
            items=_rss_schema_items(feed.items),
        )


class AtomCodec(FormatCodec):
    format = FeedFormat.ATOM
    schema = AtomFeed

    def project(self, doc: AtomFeed, warnings: List[FeedIssue]) -> Feed:
        items = []
        for n, entry in enumerate(doc.entries):
            items.append(Item(
                hyperlink=present(entry.link.href),
                title=present(entry.title),
                published=_from_zoned(entry.published, f"items[{n}].published", warnings),
                updated=_from_zoned(entry.updated, f"items[{n}].updated", warnings),
            ))

        return Feed(
            format=self.format,
            hyperlink=present(doc.link.href),
            title=present(doc.title),
            description=NOT_AVAILABLE,
            published=_from_zoned(doc.published, "published", warnings),
            updated=_from_zoned(doc.updated, "updated", warnings),
            author=present(doc.author_name),
            items=items,
        )

    def build(self, feed: Feed, warnings: List[FeedIssue]) -> AtomFeed:
        entries = []
        for n, item in enumerate(feed.items):
            entries.append(AtomEntry(
                title=item.title,
                link=AtomLink(href=item.hyperlink),
                published=_to_zoned(item.published, f"items[{n}].published", warnings),
                updated=_to_zoned(item.updated, f"items[{n}].updated", warnings),
            ))

        return AtomFeed(
            title=feed.title,
            author_name=feed.author,
            published=_to_zoned(feed.published, "published", warnings),
            updated=_to_zoned(feed.updated, "updated", warnings),
            link=AtomLink(href=feed.hyperlink),
            entries=entries,
        )


CODECS: Dict[FeedFormat, FormatCodec] = {
    codec.format: codec for codec in (RSSCodec(), RDFCodec(), AtomCodec())
}


def get_codec(fmt: Union[FeedFormat, str, None]) -> Optional[FormatCodec]:
    try:
        return CODECS[FeedFormat(fmt)]
    except ValueError:
        return None
