from .playback_strategy import PlaybackStrategyPort
from .video_info import VideoInfoPort

__all__ = [
    "PlaybackStrategyPort",
    "VideoInfoPort",
]
