"""
Modelo del frame de radar ya decodificado.
"""
from datetime import datetime
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RadarFrame(BaseModel):
    """
    Campos del esquema RadarFrame. Los opcionales quedan en None cuando el
    frame no los trae, para que el resolver aplique los defaults.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    product_name: Optional[str] = None
    radial_count: Optional[int] = Field(default=None, ge=0)
    gate_count: Optional[int] = Field(default=None, ge=0)
    gates: np.ndarray = Field(default_factory=lambda: np.empty(0, dtype=np.float32))
    start_azimuth_angle: float = 0.0
    date: Optional[datetime] = None
    longitude: float = 0.0
    latitude: float = 0.0

    @field_validator("gates", mode="before")
    @classmethod
    def _as_float32(cls, v):
        return np.asarray(v, dtype=np.float32).ravel()
