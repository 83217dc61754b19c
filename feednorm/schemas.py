"""Wire-format schemas: RSS 2.0, RDF/RSS 1.0 and Atom element trees."""

from typing import ClassVar, Dict, List

from pydantic import Field

from .rules import ATOM_NS, RDF_NS, RSS1_NS
from .xmltree import XmlModel


class RSSItem(XmlModel):
    xml_tag: ClassVar[str] = "item"

    title: str = Field(default="", alias="title")
    link: str = Field(default="", alias="link")
    pub_date: str = Field(default="", alias="pubDate")


class RSSChannel(XmlModel):
    xml_tag: ClassVar[str] = "channel"

    title: str = Field(default="", alias="title")
    link: str = Field(default="", alias="link")
    description: str = Field(default="", alias="description")
    pub_date: str = Field(default="", alias="pubDate")
    last_build_date: str = Field(default="", alias="lastBuildDate")
    items: List[RSSItem] = Field(default_factory=list, alias="item")


class RSSDocument(XmlModel):
    xml_tag: ClassVar[str] = "rss"
    xml_attributes: ClassVar[Dict[str, str]] = {"version": "2.0"}

    channel: RSSChannel = Field(default_factory=RSSChannel, alias="channel")


class RDFChannel(XmlModel):
    xml_tag: ClassVar[str] = "channel"

    title: str = Field(default="", alias="title")
    link: str = Field(default="", alias="link")
    description: str = Field(default="", alias="description")


class RDFDocument(XmlModel):
    # RSS 1.0 keeps its items beside the channel, not inside it.
    xml_tag: ClassVar[str] = "rdf:RDF"
    xml_attributes: ClassVar[Dict[str, str]] = {"xmlns:rdf": RDF_NS, "xmlns": RSS1_NS}

    channel: RDFChannel = Field(default_factory=RDFChannel, alias="channel")
    items: List[RSSItem] = Field(default_factory=list, alias="item")


class AtomLink(XmlModel):
    xml_tag: ClassVar[str] = "link"

    href: str = Field(default="", alias="@href")

    @classmethod
    def xml_rank(cls, element) -> int:
        # rel="self", "enclosure" and friends lose to the page link.
        return 0 if element.get("rel", "alternate") == "alternate" else 1


class AtomEntry(XmlModel):
    xml_tag: ClassVar[str] = "entry"

    title: str = Field(default="", alias="title")
    link: AtomLink = Field(default_factory=AtomLink, alias="link")
    published: str = Field(default="", alias="published")
    updated: str = Field(default="", alias="updated")


class AtomFeed(XmlModel):
    xml_tag: ClassVar[str] = "feed"
    xml_attributes: ClassVar[Dict[str, str]] = {"xmlns": ATOM_NS}

    title: str = Field(default="", alias="title")
    author_name: str = Field(default="", alias="author/name")
    published: str = Field(default="", alias="published")
    updated: str = Field(default="", alias="updated")
    link: AtomLink = Field(default_factory=AtomLink, alias="link")
    entries: List[AtomEntry] = Field(default_factory=list, alias="entry")
