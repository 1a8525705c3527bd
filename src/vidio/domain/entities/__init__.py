from .errors import (
    DecodeError,
    IdentifierNotFoundError,
    MissingDataError,
    NoStreamFoundError,
    ResolveError,
    TransportError,
    UpstreamApiError,
)
from .playback import PlayUrl, StreamFormat, VideoIdentifier, VideoInfo

__all__ = [
    "DecodeError",
    "IdentifierNotFoundError",
    "MissingDataError",
    "NoStreamFoundError",
    "PlayUrl",
    "ResolveError",
    "StreamFormat",
    "TransportError",
    "UpstreamApiError",
    "VideoIdentifier",
    "VideoInfo",
]
