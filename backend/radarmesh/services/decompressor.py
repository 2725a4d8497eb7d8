"""
Descompresión del buffer recibido: 4 bytes little-endian con el tamaño
descomprimido N, seguidos de un bloque en formato LZ4 frame.
"""
from __future__ import annotations

import logging
import struct

import lz4.frame

from ..core.config import settings
from ..core.errors import CorruptFrame

logger = logging.getLogger(__name__)

_SIZE_HEADER = struct.Struct("<I")


def decompress_frame(buffer: bytes | bytearray | memoryview, max_size: int | None = None) -> bytes:
    """
    Expande el bloque comprimido a exactamente N bytes.

    Raises:
        CorruptFrame: header ausente, bloque inválido, bytes sobrantes tras
            el bloque o tamaño distinto de N.
    """
    if max_size is None:
        max_size = settings.MAX_FRAME_BYTES

    view = memoryview(buffer)
    if len(view) < _SIZE_HEADER.size:
        raise CorruptFrame(f"Frame demasiado corto: {len(view)} bytes, se esperaba header de 4")

    (expected,) = _SIZE_HEADER.unpack_from(view, 0)
    if expected > max_size:
        raise CorruptFrame(f"Tamaño declarado {expected} supera el máximo {max_size}")

    inflater = lz4.frame.LZ4FrameDecompressor()
    try:
        # expected + 1 para detectar bloques que expanden de más
        raw = inflater.decompress(bytes(view[_SIZE_HEADER.size:]), max_length=expected + 1)
    except RuntimeError as e:
        raise CorruptFrame(f"Bloque comprimido inválido: {e}") from e

    if len(raw) != expected or not inflater.eof:
        raise CorruptFrame(
            f"Descompresión inconsistente: obtenido {len(raw)} bytes, esperado {expected}"
        )
    if inflater.unused_data:
        raise CorruptFrame(f"{len(inflater.unused_data)} bytes sobrantes tras el bloque comprimido")

    logger.debug("Frame descomprimido: %d bytes", expected)
    return raw


def compress_frame(raw: bytes | bytearray | memoryview) -> bytes:
    """Inversa de decompress_frame; la usan los productores de frames."""
    data = bytes(raw)
    return _SIZE_HEADER.pack(len(data)) + lz4.frame.compress(data)
