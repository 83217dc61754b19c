"""
Input charset normalization.

Feeds arrive in whatever encoding their publisher chose. The sniffer looks
for ASCII markers and the decoders trim everything before the root element
(XML declaration included), so input is re-encoded as UTF-8 first.

Rules:
- A byte-order mark wins.
- Otherwise trust the XML declaration if it decodes cleanly.
- Otherwise try strict UTF-8, then the best guess from charset-normalizer.
- If nothing decodes, fall back to UTF-8 with replacement characters and report it.
- Always output UTF-8 without a BOM, with the declaration saying so.
"""

from __future__ import annotations

import codecs
import re
from typing import Optional, Tuple

from charset_normalizer import from_bytes

from .models import EncodingReport
from .rules import OUTPUT_ENCODING

_XML_DECL_ENCODING = re.compile(
    rb'^(\s*<\?xml[^>]*encoding=["\'])([^"\']+)(["\'][^>]*\?>)', re.IGNORECASE
)

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _declared_encoding(raw: bytes) -> Optional[str]:
    match = _XML_DECL_ENCODING.search(raw[:2000])
    if match is None:
        return None
    return match.group(2).decode("ascii", errors="replace").lower()


def _try_decode(raw: bytes, encoding: str) -> Optional[str]:
    try:
        return raw.decode(encoding)
    except (LookupError, UnicodeDecodeError):
        return None


def to_utf8(raw: bytes) -> Tuple[bytes, EncodingReport]:
    detected = None
    text = None
    decode_used = OUTPUT_ENCODING

    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            detected = encoding
            break

    if detected is None:
        detected = _declared_encoding(raw)

    if detected is not None:
        text = _try_decode(raw, detected)
        decode_used = detected

    if text is None:
        text = _try_decode(raw, OUTPUT_ENCODING)
        decode_used = OUTPUT_ENCODING

    if text is None:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
            text = _try_decode(raw, match.encoding)
            decode_used = match.encoding

    decode_fallback = text is None
    if text is None:
        # Last resort: keep going deterministically
        text = raw.decode(OUTPUT_ENCODING, errors="replace")
        decode_used = OUTPUT_ENCODING

    # Explicit-endian codecs keep a BOM as U+FEFF
    text = text.lstrip("\ufeff")

    data = text.encode(OUTPUT_ENCODING)
    data = _XML_DECL_ENCODING.sub(rb"\g<1>utf-8\g<3>", data, count=1)

    return data, EncodingReport(
        detected=detected,
        decode_used=decode_used,
        decode_fallback=decode_fallback,
    )
