"""
radarmesh: convierte barridos polares de radar comprimidos en mallas de
triángulos con color por vértice, procesados en un worker en segundo plano.
"""
from .core.config import settings, configure_logging
from .core.errors import CorruptFrame, DecodeError, DegenerateInterpolation, RadarMeshError
from .services.orchestrators import FrameChannel, FrameWorker

__all__ = [
    'settings',
    'configure_logging',
    'CorruptFrame',
    'DecodeError',
    'DegenerateInterpolation',
    'RadarMeshError',
    'FrameChannel',
    'FrameWorker',
]
