"""Domain policy table: which query parameters are worth keeping per domain."""

from __future__ import annotations

import re

# Ordered (domain, params) pairs. First matching domain wins, so order matters.
DOMAIN_POLICIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    # Video platforms
    ("youtube.com", ("v", "t", "list", "index", "start")),
    ("youtu.be", ("t", "si")),
    ("vimeo.com", ("h", "clip_id")),
    ("twitch.tv", ("video", "collection", "t")),
    ("dailymotion.com", ("video",)),
    # Search engines
    ("google.com", ("q", "tbm", "tbs", "start", "hl")),
    ("bing.com", ("q", "filters", "pq")),
    ("duckduckgo.com", ("q", "ia", "t", "kp")),
    # Maps
    ("maps.google.com", ("q", "z", "ll", "t", "data", "mapclient", "mra", "daddr", "saddr")),
    ("openstreetmap.org", ("mlat", "mlon", "zoom")),
    # E-commerce
    ("amazon.com", ("dp", "gp/product", "pf_rd_r")),
    ("ebay.com", ("item", "itm")),
    ("etsy.com", ("listing",)),
    # Media / streaming
    ("spotify.com", ("track", "album", "playlist", "show", "episode")),
    ("soundcloud.com", ("in", "t")),
    ("netflix.com", ("trackId", "jbv", "jb")),
    # Social
    ("twitter.com", ("status", "id", "q", "s")),
    ("x.com", ("status", "id", "q", "s")),
    ("reddit.com", ("sort", "after", "before", "t", "q")),
    ("linkedin.com", ("trackingId",)),
    ("facebook.com", ("story_fbid", "id", "video_id", "set")),
    ("instagram.com", ("igshid",)),
    # Dev / productivity
    ("github.com", ("q", "tab", "l", "t", "since", "until", "type")),
    ("docs.google.com", ("gid", "usp")),
    ("drive.google.com", ("id",)),
    ("stackoverflow.com", ("q", "sort", "page", "tab")),
    # News
    ("medium.com", ("source", "id")),
    ("nytimes.com", ("searchResultPosition",)),
    # General / other
    ("wikipedia.org", ("oldid", "uselang", "title", "section")),
    ("zoom.us", ("pwd", "uname")),
    ("meet.google.com", ("authuser",)),
)

POLICY_DOMAINS: tuple[str, ...] = tuple(domain for domain, _ in DOMAIN_POLICIES)

# Approximate ccTLD variants, e.g. www.google.com.au for google.com.
# Not a public-suffix lookup: bare google.co.uk does not match.
_CCTLD_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\.{re.escape(domain)}\.[a-z]{{2,3}}$") for domain in POLICY_DOMAINS
)


def matches_domain(hostname: str, domain: str, cctld_pattern: re.Pattern[str] | None = None) -> bool:
    """Check whether *hostname* is *domain*, a subdomain of it, or a ccTLD variant."""
    if hostname == domain or hostname.endswith("." + domain):
        return True
    if cctld_pattern is None:
        cctld_pattern = re.compile(rf"\.{re.escape(domain)}\.[a-z]{{2,3}}$")
    return cctld_pattern.search(hostname) is not None


def match_domain(hostname: str) -> tuple[str, tuple[str, ...]] | None:
    """Return the first (domain, params) policy matching *hostname*, or None."""
    for (domain, params), pattern in zip(DOMAIN_POLICIES, _CCTLD_PATTERNS, strict=True):
        if matches_domain(hostname, domain, pattern):
            return domain, params
    return None
