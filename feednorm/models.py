from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class FeedFormat(str, Enum):
    RSS = "rss"
    RDF = "rdf"
    ATOM = "atom"


class IssueKind(str, Enum):
    UNPARSEABLE_INPUT = "unparseable_input"
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    TIMESTAMP_PARSE_FAILURE = "timestamp_parse_failure"
    SERIALIZATION_FAILURE = "serialization_failure"


class Item(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    hyperlink: str = ""
    title: str = ""
    published: str = ""
    updated: str = ""


class Feed(BaseModel):
    """
    Unified, format-agnostic feed.

    The zero value (every string empty, no items, empty format) is what
    callers get back for input that could not be decoded.
    """

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    format: str = Field(default="", examples=["rss"])
    hyperlink: str = ""
    title: str = ""
    description: str = ""
    published: str = ""
    updated: str = ""
    author: str = ""
    items: List[Item] = Field(default_factory=list)

    @field_validator("format", mode="before")
    @classmethod
    def known_format(cls, value):
        if isinstance(value, FeedFormat):
            return value.value
        if value not in ("", *(f.value for f in FeedFormat)):
            raise ValueError(f"unknown feed format: {value!r}")
        return value


class FeedIssue(BaseModel):
    kind: IssueKind
    field: Optional[str] = None
    value: Optional[str] = None
    message: str


class FeedResult(BaseModel):
    feed: Feed = Field(default_factory=Feed)
    warnings: List[FeedIssue] = Field(default_factory=list)
    errors: List[FeedIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class EncodeResult(BaseModel):
    data: bytes = b""
    warnings: List[FeedIssue] = Field(default_factory=list)
    errors: List[FeedIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str = "utf-8"
    decode_fallback: bool = False


class NormalizeReport(BaseModel):
    format: Optional[FeedFormat] = None
    encoding: EncodingReport = Field(default_factory=EncodingReport)
    ok: bool = True
    warnings: List[FeedIssue] = Field(default_factory=list)
    errors: List[FeedIssue] = Field(default_factory=list)


class NormalizeResponse(BaseModel):
    feed: Feed
    report: NormalizeReport


class HealthResponse(BaseModel):
    ok: bool = True
