from feednorm import Feed, IssueKind, Item, parse, parse_atom, parse_rdf, parse_result, parse_rss

RSS = (
    b"<rss><channel><title>Example</title><link>http://x</link>"
    b"<pubDate>2024-01-02 03:04:05</pubDate>"
    b"<item><title>A</title><link>http://x/a</link><pubDate>2024-01-02 03:04:05</pubDate></item>"
    b"</channel></rss>"
)

RDF = b"""<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" xmlns="http://purl.org/rss/1.0/">
  <channel rdf:about="http://x/">
    <title>RDF Example</title>
    <link>http://x/</link>
    <description>  An RSS 1.0 feed  </description>
  </channel>
  <item rdf:about="http://x/1"><title>One</title><link>http://x/1</link></item>
  <item rdf:about="http://x/2"><title>Two</title><link>http://x/2</link></item>
</rdf:RDF>
"""

ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <link rel="self" href="http://x/feed.xml"/>
  <link href="http://x/"/>
  <author><name>Jane</name></author>
  <published>2024-01-01T00:00:00Z</published>
  <updated>2024-01-02T03:04:05+02:00</updated>
  <entry>
    <title>First</title>
    <link href="http://x/first"/>
    <published>2024-01-01T10:00:00.123456789Z</published>
    <updated>2024-01-01T11:00:00Z</updated>
  </entry>
</feed>
"""


def test_rss_scenario():
    feed = parse(RSS)
    assert feed == Feed(
        format="rss",
        title="Example",
        hyperlink="http://x",
        description="N/A",
        published="2024-01-02 03:04:05",
        updated="N/A",
        author="N/A",
        items=[Item(title="A", hyperlink="http://x/a", published="2024-01-02 03:04:05", updated="N/A")],
    )


def test_rss_item_title_presence():
    raw = (
        b"<rss><channel><title>t</title>"
        b"<item><title></title><link>http://x/1</link></item>"
        b"<item><title>  Hello  </title><link>http://x/2</link></item>"
        b"<item><title>   </title></item>"
        b"</channel></rss>"
    )
    items = parse_rss(raw).items
    assert [i.title for i in items] == ["N/A", "Hello", "N/A"]
    assert items[2].hyperlink == "N/A"


def test_rss_items_keep_document_order():
    raw = b"<rss><channel>" + b"".join(
        b"<item><title>%d</title></item>" % n for n in range(5)
    ) + b"</channel></rss>"
    assert [i.title for i in parse_rss(raw).items] == ["0", "1", "2", "3", "4"]


def test_rdf_projection():
    feed = parse_rdf(RDF)
    assert feed.format == "rdf"
    assert feed.title == "RDF Example"
    assert feed.hyperlink == "http://x/"
    assert feed.description == "An RSS 1.0 feed"
    assert (feed.published, feed.updated, feed.author) == ("N/A", "N/A", "N/A")
    assert [(i.title, i.hyperlink, i.published, i.updated) for i in feed.items] == [
        ("One", "http://x/1", "N/A", "N/A"),
        ("Two", "http://x/2", "N/A", "N/A"),
    ]


def test_atom_projection():
    feed = parse_atom(ATOM)
    assert feed.format == "atom"
    assert feed.title == "Atom Example"
    # rel="self" loses to the page link
    assert feed.hyperlink == "http://x/"
    assert feed.author == "Jane"
    assert feed.description == "N/A"
    assert feed.published == "2024-01-01 00:00:00"
    # offset dropped, civil time kept
    assert feed.updated == "2024-01-02 03:04:05"

    (entry,) = feed.items
    assert entry == Item(
        title="First",
        hyperlink="http://x/first",
        published="2024-01-01 10:00:00",
        updated="2024-01-01 11:00:00",
    )


def test_atom_missing_fields():
    feed = parse_atom(b"<feed><entry><title>x</title></entry></feed>")
    assert feed.hyperlink == "N/A"
    assert feed.author == "N/A"
    assert feed.published == "N/A"
    assert feed.items[0].hyperlink == "N/A"
    assert feed.items[0].updated == "N/A"


def test_atom_bad_timestamp_degrades_to_zero():
    raw = b"<feed><title>t</title><updated>yesterday</updated></feed>"
    result = parse_result(raw)
    assert result.ok
    assert result.feed.updated == "0001-01-01 00:00:00"
    (warning,) = result.warnings
    assert warning.kind == IssueKind.TIMESTAMP_PARSE_FAILURE
    assert warning.field == "updated"
    assert warning.value == "yesterday"


def test_malformed_input_gives_zero_feed():
    for decode, raw in [
        (parse_rss, RSS[:40]),
        (parse_rdf, RDF[:120]),
        (parse_atom, ATOM[:80]),
        (parse, RSS[:40]),
        (parse, b""),
    ]:
        feed = decode(raw)
        assert feed == Feed()
        assert feed.format == ""
        assert feed.items == []


def test_wrong_root_is_unparseable():
    result = parse_result(b"<feedback><title>x</title></feedback>")
    assert result.feed == Feed()
    assert result.errors[0].kind == IssueKind.UNPARSEABLE_INPUT
    assert result.errors[0].value == "feedback"


def test_unrecognized_input():
    result = parse_result(b"<html><body>not a feed</body></html>")
    assert result.feed == Feed()
    assert result.errors[0].kind == IssueKind.UNRECOGNIZED_FORMAT


def test_leading_junk_is_trimmed():
    raw = b"\xef\xbb\xbfgarbage before the document " + RSS
    assert parse(raw).title == "Example"


def test_rdf_without_namespace_declarations():
    raw = (
        b"<rdf:RDF><channel><title>T</title><link>http://x/</link></channel>"
        b"<item><title>One</title><link>http://x/1</link></item></rdf:RDF>"
    )
    feed = parse(raw)
    assert feed.format == "rdf"
    assert feed.title == "T"
    assert [(i.title, i.hyperlink) for i in feed.items] == [("One", "http://x/1")]


def test_undeclared_extension_elements_are_ignored():
    raw = (
        b"<rss><channel><title>T</title>"
        b"<item><title>A</title><dc:creator>me</dc:creator><link>http://x/a</link></item>"
        b"</channel></rss>"
    )
    feed = parse_rss(raw)
    assert feed.format == "rss"
    assert feed.items == [Item(title="A", hyperlink="http://x/a", published="N/A", updated="N/A")]


def test_comments_inside_text_are_skipped():
    raw = b"<rss><channel><title>Hello<!-- draft --> world</title></channel></rss>"
    assert parse_rss(raw).title == "Hello world"


def test_rss_accepts_any_root_with_a_channel():
    feed = parse_rss(b"<document><channel><title>T</title></channel></document>")
    assert feed.format == "rss"
    assert feed.title == "T"
