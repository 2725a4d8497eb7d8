"""
Configuración de productos: tablas estáticas por nombre y producto resuelto por frame.
"""
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

RGB = Tuple[int, int, int]


def _sorted_colormap(v) -> Dict[float, RGB]:
    """Normaliza el colormap: claves float ascendentes, colores como tuplas."""
    items = sorted((float(k), tuple(int(c) for c in color)) for k, color in dict(v).items())
    for key, color in items:
        if len(color) != 3:
            raise ValueError(f"Color inválido para breakpoint {key}: {color}")
    return dict(items)


class ProductTable(BaseModel):
    """Entrada de la tabla estática (colormap + cutoffs + geometría) de un producto."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    colormap: Dict[float, RGB] = Field(default_factory=dict)
    lower_cutoff: float = Field(alias="lowerCutoff")
    upper_cutoff: float = Field(alias="upperCutoff")
    cone_of_silence_radius: float = Field(alias="coneOfSilenceRadius")
    scaled_resolution: float = Field(alias="scaledResolution")

    @field_validator("colormap", mode="before")
    @classmethod
    def _normalize_colormap(cls, v):
        return _sorted_colormap(v)


class RadarProduct(BaseModel):
    """
    Configuración resuelta para un barrido. Inmutable; se crea por frame.
    """
    model_config = ConfigDict(frozen=True)

    product: str = ""
    radial_count: int = Field(default=720, gt=0)
    gate_count: int = Field(default=0, ge=0)
    colormap: Dict[float, RGB] = Field(default_factory=dict)
    lower_cutoff: float = 0.0
    upper_cutoff: float = 150.0
    cone_of_silence_radius: float = 21.25
    scaled_resolution: float = 2.5

    @field_validator("colormap", mode="before")
    @classmethod
    def _normalize_colormap(cls, v):
        return _sorted_colormap(v)

    @property
    def breakpoints(self) -> Tuple[float, ...]:
        return tuple(self.colormap)
