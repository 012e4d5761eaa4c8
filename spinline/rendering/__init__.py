"""Frame animation, screen rendering and stream interception."""

from .engine import RenderEngine
from .frame_source import FrameSource
from .interceptor import InterceptingWriter, PassthroughWriter

__all__ = [
    'FrameSource',
    'InterceptingWriter',
    'PassthroughWriter',
    'RenderEngine'
]
