"""
Normalize RSS 2.0, RDF/RSS 1.0 and Atom feeds into one model, and back.
"""

from .formats import FormatCodec, get_codec
from .models import EncodeResult, Feed, FeedFormat, FeedIssue, FeedResult, IssueKind, Item
from .normalize import (
    marshal,
    marshal_result,
    parse,
    parse_atom,
    parse_rdf,
    parse_result,
    parse_rss,
    sniff,
)
from .rules import NOT_AVAILABLE

__all__ = [
    "Feed",
    "Item",
    "FeedFormat",
    "FeedIssue",
    "FeedResult",
    "EncodeResult",
    "IssueKind",
    "FormatCodec",
    "get_codec",
    "parse",
    "parse_result",
    "parse_rss",
    "parse_rdf",
    "parse_atom",
    "marshal",
    "marshal_result",
    "sniff",
    "NOT_AVAILABLE",
]
