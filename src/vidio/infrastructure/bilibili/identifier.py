"""BV id extraction from arbitrary bilibili page URLs."""

from __future__ import annotations

import re

from vidio.domain.entities.errors import IdentifierNotFoundError
from vidio.domain.entities.playback import VideoIdentifier

# "BV" followed by the base58-ish alphanumeric body
_BVID_RE = re.compile(r"BV[a-zA-Z0-9]+")


def extract_bvid(url: str) -> VideoIdentifier:
    """Return the first BV id found before the query string.

    Query parameters are dropped first; tracking parameters such as
    ``vd_source`` or share links may carry unrelated BV ids.
    """
    path = url.split("?", 1)[0]
    match = _BVID_RE.search(path)
    if match is None:
        raise IdentifierNotFoundError(url)
    return VideoIdentifier(match.group(0))
