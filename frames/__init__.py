"""
Frame intake: the bounded frame queue and the per-frame processing stage.
"""

from .queue import FrameHandler, FrameMetadata, FramePacket, FrameQueue
from .processor import FrameProcessor, FrameReport

__all__ = [
    "FrameHandler",
    "FrameMetadata",
    "FramePacket",
    "FrameQueue",
    "FrameProcessor",
    "FrameReport",
]
