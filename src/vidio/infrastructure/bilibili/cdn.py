"""CDN host normalization for single-file stream URLs.

Single-file URLs are sometimes routed through a third-party edge network
or a retired mirror that is unreachable from some networks. Only the
host is rewritten; path and query (including signatures) stay as-is.
"""

from __future__ import annotations

from urllib.parse import urlsplit

MIRROR_HOST = "upos-sz-mirror08c.bilivideo.com"

_EDGE_DOMAIN = "akamaized.net"
_DEPRECATED_LABEL = "mirrorcosov"
_CURRENT_LABEL = "mirror08c"


def _is_edge_host(host: str) -> bool:
    return host == _EDGE_DOMAIN or host.endswith("." + _EDGE_DOMAIN)


def _replace_netloc(url: str, old_netloc: str, new_netloc: str) -> str:
    # The netloc is the first occurrence after the scheme separator.
    idx = url.find(old_netloc)
    if idx < 0:
        return url
    return url[:idx] + new_netloc + url[idx + len(old_netloc) :]


def rewrite_cdn_host(url: str) -> str:
    """Point *url* at a first-party mirror when it uses a bad edge host.

    - ``*.akamaized.net`` hosts are replaced by :data:`MIRROR_HOST`.
    - Hosts containing ``mirrorcosov`` get that label swapped for
      ``mirror08c``.
    - Anything else is returned unchanged.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        port = f":{parts.port}" if parts.port is not None else ""
    except ValueError:
        return url

    if not host:
        return url

    netloc = parts.netloc
    userinfo, at, hostport = netloc.rpartition("@")
    prefix = f"{userinfo}{at}"

    if _is_edge_host(host):
        return _replace_netloc(url, netloc, f"{prefix}{MIRROR_HOST}{port}")

    if _DEPRECATED_LABEL in hostport:
        new_hostport = hostport.replace(_DEPRECATED_LABEL, _CURRENT_LABEL)
        return _replace_netloc(url, netloc, f"{prefix}{new_hostport}")

    return url
