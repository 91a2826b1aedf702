"""URL canonicalization and content hashing for cross-run identity."""

import hashlib
from typing import Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

DEFAULT_STRIP_QUERY_PARAMS = {
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "utm_id",
    "gclid",
    "fbclid",
    "mc_cid",
    "mc_eid",
    "ref",
    "ref_src",
    "ref_url",
}


def canonicalize_url(url: str, strip_params: Optional[Iterable[str]] = None) -> str:
    """
    Canonicalize a URL for identity hashing.

    Lowercases scheme and host, drops fragments and tracking parameters,
    and sorts the remaining query parameters.
    """
    if not url:
        return ""
    strip = set(strip_params) if strip_params is not None else DEFAULT_STRIP_QUERY_PARAMS
    p = urlparse(url.strip())
    scheme = (p.scheme or "https").lower()
    netloc = (p.netloc or "").lower()
    path = p.path or "/"

    kept = [(k, v) for k, v in parse_qsl(p.query, keep_blank_values=True) if k.lower() not in strip]
    kept.sort(key=lambda kv: (kv[0].lower(), kv[1]))
    query = urlencode(kept, doseq=True)

    return urlunparse((scheme, netloc, path, "", query, ""))


def content_hash(url: str) -> str:
    """Stable storage identity for an article URL."""
    return hashlib.sha256(canonicalize_url(url).encode("utf-8")).hexdigest()


def extract_outlet(url: str) -> Optional[str]:
    """Bare hostname of a URL, without a leading www."""
    host = urlparse(url or "").hostname
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host
