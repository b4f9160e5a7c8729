"""
Response Header Builder
=========================

Builds the three headers a file download needs:

    Content-Type:        what the bytes claim to be
    Content-Disposition: "save this as 製品リスト.xls"
    Cache-Control:       never reuse an old export

LEARNING POINT: Non-ASCII Filenames
--------------------------------------
HTTP headers are ASCII. A Japanese filename has to be percent-encoded,
and RFC 6266 adds a second parameter that says which charset the
encoding uses:

    attachment; filename="%E8%A3%BD%E5%93%81.xls"; filename*=UTF-8''%E8%A3%BD%E5%93%81.xls

Modern browsers read filename* and decode it. Old Internet Explorer
does not understand filename* at all (and may choke on it), but does
decode a percent-encoded plain filename, so it gets only the first form.

LEARNING POINT: Explicit Inputs
----------------------------------
The client identity (User-Agent) is a parameter, not something we read
from a global request object. That keeps this module testable without
a web server.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import quote

from sheetexport.io.serializers import SERIALIZERS, parse_format
from sheetexport.io.serializers.base import ExportFormat

DEFAULT_LEGACY_PATTERNS = (r"MSIE [1-8]\.", r"Trident/4\.0")
DEFAULT_CACHE_CONTROL = "no-store, no-cache, must-revalidate, max-age=0"


@dataclass(frozen=True)
class ResponseHeaderSet:
    content_type: str
    content_disposition: str
    cache_control: str

    def as_dict(self) -> dict[str, str]:
        """HTTP header names mapped to values, ready for a response object."""
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": self.content_disposition,
            "Cache-Control": self.cache_control,
        }


def encode_filename(filename: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(filename, safe="", encoding="utf-8")


def is_legacy_client(client_identity: str | None, patterns: Iterable[str] = DEFAULT_LEGACY_PATTERNS) -> bool:
    """True if the User-Agent matches any legacy-client signature."""
    if not client_identity:
        return False
    return any(re.search(pattern, client_identity) for pattern in patterns)


def content_disposition(filename: str, legacy: bool = False) -> str:
    encoded = encode_filename(filename)
    if legacy:
        return f'attachment; filename="{encoded}"'
    return f"attachment; filename=\"{encoded}\"; filename*=UTF-8''{encoded}"


def content_type_for(target_format: "str | ExportFormat") -> str:
    return SERIALIZERS[parse_format(target_format)].content_type


def build_headers(
    filename: str,
    target_format: "str | ExportFormat",
    client_identity: str | None = None,
    legacy_patterns: Iterable[str] = DEFAULT_LEGACY_PATTERNS,
    cache_control: str = DEFAULT_CACHE_CONTROL,
) -> ResponseHeaderSet:
    """
    Build the header set for a file download.

    Args:
        filename: Name the user should see, may contain any Unicode
        target_format: Output format, decides the Content-Type
        client_identity: The requesting client's User-Agent string
        legacy_patterns: Regexes identifying clients without filename* support
        cache_control: Cache-Control value; exports are never cacheable

    Returns:
        ResponseHeaderSet with all three values filled in
    """
    legacy = is_legacy_client(client_identity, legacy_patterns)
    return ResponseHeaderSet(
        content_type=content_type_for(target_format),
        content_disposition=content_disposition(filename, legacy=legacy),
        cache_control=cache_control,
    )
