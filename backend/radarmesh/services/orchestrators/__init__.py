"""
Orchestrators para coordinar el pipeline completo de un frame.
"""
from .frame_worker import FrameChannel, FrameWorker

__all__ = [
    'FrameChannel',
    'FrameWorker',
]
