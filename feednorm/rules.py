"""
Conventions shared by every feed format: what a missing value looks like,
how timestamps are laid out, how formats are recognised, and the names and
namespaces the encoders write.
"""

NOT_AVAILABLE = "N/A"  # sentinel for absent or empty fields

CANONICAL_TIMESTAMP = "%Y-%m-%d %H:%M:%S"  # no timezone
ZONED_TIMESTAMPS = ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z")  # RFC 3339
ZERO_CANONICAL = "0001-01-01 00:00:00"
ZERO_ZONED = "0001-01-01T00:00:00Z"

# Checked in this order; the first marker found wins.
SNIFF_MARKERS = (
    ("atom", b"<feed"),
    ("rss", b"<rss"),
    ("rdf", b"<rdf:RDF"),
)

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RSS1_NS = "http://purl.org/rss/1.0/"
ATOM_NS = "http://www.w3.org/2005/Atom"

OUTPUT_ENCODING = "utf-8"

UPLOAD_SUFFIXES = (".xml", ".rss", ".atom", ".rdf")
MEDIA_TYPES = {
    "rss": "application/rss+xml",
    "rdf": "application/rdf+xml",
    "atom": "application/atom+xml",
}
