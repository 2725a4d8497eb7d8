import logging
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Radar Mesh Worker"
    LOG_LEVEL: str = "INFO"

    # Producto usado cuando el frame no trae nombre
    DEFAULT_PRODUCT: str = "Reflectivity"

    # Defaults defensivos para frames incompletos
    DEFAULT_RADIAL_COUNT: int = 720
    DEFAULT_GATE_COUNT: int = 0
    DEFAULT_LOWER_CUTOFF: float = 0.0
    DEFAULT_UPPER_CUTOFF: float = 150.0
    DEFAULT_CONE_OF_SILENCE_RADIUS: float = 21.25
    DEFAULT_SCALED_RESOLUTION: float = 2.5

    # "legacy" reproduce la mezcla del canal rojo con color1[1]
    COLOR_MIXING_MODE: Literal["legacy", "corrected"] = "legacy"

    # Límites del worker
    MAX_FRAME_BYTES: int = 256 * 1024 * 1024  # 256 MB
    PROGRESS_QUEUE_SIZE: int = 1024
    PARALLEL_SWEEP: bool = False
    SWEEP_WORKERS: int = 4

    class Config:
        env_file = ".env"
        env_prefix = "RADARMESH_"

settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configura el logging raíz según LOG_LEVEL (o el nivel recibido)."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
