"""
Mensajes que el worker publica en su canal: progreso, resultado y fallo.
"""
from datetime import datetime
from typing import Any, Dict, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ProgressMessage(BaseModel):
    """Porcentaje de radiales completados. Fire-and-forget, no terminal."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    percentage_complete: int = Field(..., ge=0, le=100, alias="percentageComplete")

    def to_message(self) -> Dict[str, Any]:
        return {"percentageComplete": self.percentage_complete}


class WorkerResult(BaseModel):
    """
    Payload final de un frame. Los buffers llegan ya en solo lectura: la
    propiedad pasa al receptor y el worker no vuelve a escribirlos.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    date: Optional[datetime] = None
    longitude: float
    latitude: float
    vertices: np.ndarray
    colors: np.ndarray

    @field_serializer("date", when_used="json")
    def _check_ts(self, v: Optional[datetime]) -> Optional[str]:
        return v.isoformat() if v else None

    def to_message(self) -> Dict[str, Any]:
        # memoryview expone los buffers sin copiarlos
        return {
            "result": {
                "date": self.date,
                "longitude": self.longitude,
                "latitude": self.latitude,
                "vertices": memoryview(self.vertices),
                "colors": memoryview(self.colors),
            }
        }


class ResultMessage(BaseModel):
    """Mensaje terminal exitoso: exactamente uno por frame."""
    model_config = ConfigDict(frozen=True)

    result: WorkerResult

    def to_message(self) -> Dict[str, Any]:
        return self.result.to_message()


class FailureMessage(BaseModel):
    """Mensaje terminal de error (CorruptFrame / DecodeError)."""
    model_config = ConfigDict(frozen=True)

    kind: str
    detail: str = ""

    def to_message(self) -> Dict[str, Any]:
        return {"error": {"kind": self.kind, "detail": self.detail}}
