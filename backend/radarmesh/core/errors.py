"""
Excepciones del pipeline frame → malla.
"""


class RadarMeshError(Exception):
    """Base de todos los errores del worker."""


class CorruptFrame(RadarMeshError):
    """El bloque comprimido no se puede expandir al tamaño declarado."""


class DecodeError(RadarMeshError):
    """Los bytes descomprimidos no respetan el esquema de RadarFrame."""


class DegenerateInterpolation(RadarMeshError):
    """Tramo de colormap de ancho cero; se resuelve localmente usando color1."""
