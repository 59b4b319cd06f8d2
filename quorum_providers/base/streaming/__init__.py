"""Streaming package: frame parsing, frame reading and callback driving."""

from .callbacks import StreamingCallbacks
from .driver import accumulate_frames, drive_stream
from .frame_parser import DEFAULT_PREFIX, DEFAULT_SENTINEL, FrameParser
from .frame_reader import iter_stream_frames
from .streaming_support import streaming_supported

__all__ = [
    "StreamingCallbacks",
    "accumulate_frames",
    "drive_stream",
    "FrameParser",
    "DEFAULT_PREFIX",
    "DEFAULT_SENTINEL",
    "iter_stream_frames",
    "streaming_supported",
]
