"""URL validation and tracking-parameter cleaning."""

from __future__ import annotations

import re
from urllib.parse import SplitResult, parse_qsl, quote_plus, urlencode, urlsplit

from urlaundry.models import CleanResult
from urlaundry.policies import match_domain

# Browsers ignore leading/trailing C0 controls and spaces when parsing a URL
_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

_FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|")

_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


def parse_absolute_url(s: str) -> SplitResult | None:
    """Split *s* into URL parts if it is an absolute URL with a host, else None."""
    if not isinstance(s, str):
        return None

    try:
        parts = urlsplit(s.strip(_C0_CONTROL_OR_SPACE))
        # .port validates the port range and raises on garbage
        parts.port
    except ValueError:
        return None

    if not _SCHEME_RE.fullmatch(parts.scheme):
        return None

    hostname = parts.hostname
    if not hostname:
        return None

    # IPv6 literals come back without brackets; urlsplit has already checked them
    if ":" not in hostname and any(c in _FORBIDDEN_HOST_CHARS for c in hostname):
        return None

    return parts


def is_valid_url(s: str) -> bool:
    """Return True if *s* parses as an absolute URL with a scheme and host."""
    return parse_absolute_url(s) is not None


def url_origin(parts: SplitResult) -> str:
    """Build scheme://host[:port], dropping credentials and default ports."""
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{port}"

    return f"{parts.scheme}://{host}"


def url_pathname(parts: SplitResult) -> str:
    """Path component; hierarchical schemes always have at least '/'."""
    if not parts.path and parts.scheme in DEFAULT_PORTS:
        return "/"
    return parts.path


def quote_form_value(s: str, safe: str = "", encoding: str | None = None, errors: str | None = None) -> str:
    """Form-urlencode one key or value the way browsers serialize URLSearchParams.

    Spaces become "+", "*" stays literal, "~" is escaped and lone surrogates
    become U+FFFD. *safe*, *encoding* and *errors* are accepted for
    ``urlencode(quote_via=...)`` and ignored.
    """
    s = _LONE_SURROGATE_RE.sub("\ufffd", s)
    return quote_plus(s, safe="*").replace("~", "%7E")


def clean_url(raw: str) -> CleanResult:
    """Strip query parameters not allowed by the host's domain policy.

    Parameters listed in the matched policy are kept (last value wins) in
    policy order; unknown domains lose their whole query string. The
    fragment is always kept. Input that does not parse as an absolute URL is
    returned unchanged with no preserved parameters.
    """
    parts = parse_absolute_url(raw)
    if parts is None:
        return CleanResult(url=raw, preserved_params=())

    base = url_origin(parts) + url_pathname(parts)
    fragment = f"#{parts.fragment}" if parts.fragment else ""

    policy = match_domain(parts.hostname or "")
    if policy is None:
        return CleanResult(url=base + fragment, preserved_params=())

    _, params_to_keep = policy
    query = dict(parse_qsl(parts.query, keep_blank_values=True))

    kept = [(name, query[name]) for name in params_to_keep if name in query]
    url = base
    if kept:
        url += "?" + urlencode(kept, quote_via=quote_form_value)

    return CleanResult(
        url=url + fragment,
        preserved_params=tuple(name for name, _ in kept),
    )


def count_query_params(raw: str) -> int:
    """Count query entries in *raw*, repeats and blank values included. 0 if unparseable."""
    parts = parse_absolute_url(raw)
    if parts is None:
        return 0
    return len(parse_qsl(parts.query, keep_blank_values=True))


def count_removed_params(raw: str, result: CleanResult) -> int:
    """Number of query entries dropped from *raw* to produce *result*."""
    return max(count_query_params(raw) - len(result.preserved_params), 0)
