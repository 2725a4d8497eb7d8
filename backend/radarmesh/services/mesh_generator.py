"""
Generación de la malla de triángulos (posiciones + colores por vértice)
a partir de un barrido polar radial × gate.

Cada celda aceptada (lower_cutoff < valor < upper_cutoff) emite dos
triángulos: 6 vértices de 3 componentes (x, y, 0) y 6 colores RGB.
"""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, NamedTuple, Optional, Tuple

import numpy as np

from ..core.config import settings
from ..core.constants import COMPONENTS_PER_VERTEX, VERTICES_PER_CELL
from ..models import RadarProduct
from .color_interpolation import interpolate_color, round_half_up

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class GeneratedMesh(NamedTuple):
    vertices: np.ndarray
    colors: np.ndarray

    @property
    def vertex_count(self) -> int:
        return self.vertices.size // COMPONENTS_PER_VERTEX


def azimuth_offset_radians(start_azimuth: float) -> float:
    """Ángulo de inicio (brújula, grados) → marco del renderer (0 = este, antihorario)."""
    return ((360 - start_azimuth + 90) / 360) * (2 * math.pi)


def radial_angle(i: int, angular_step_divisor: float, offset: float) -> float:
    return (math.pi * i) / angular_step_divisor + offset


def progress_percentage(completed: int, total: int) -> int:
    return round_half_up((completed / total) * 100)


def _prepare_values(gates, product: RadarProduct) -> np.ndarray:
    """Devuelve la matriz (radiales, gates) en float64; rellena con NaN si faltan valores."""
    expected = product.radial_count * product.gate_count
    values = np.asarray(gates, dtype=np.float64).ravel()
    if values.size < expected:
        logger.warning(
            "Secuencia de gates incompleta: %d valores, se esperaban %d. Se completa con NaN",
            values.size, expected,
        )
        values = np.concatenate([values, np.full(expected - values.size, np.nan)])
    return values[:expected].reshape(product.radial_count, product.gate_count)


def _row_mesh(
    i: int,
    row: np.ndarray,
    product: RadarProduct,
    angular_step_divisor: float,
    offset: float,
    breakpoints: Tuple[float, ...],
    mode: str,
) -> Tuple[np.ndarray, np.ndarray]:
    """Vértices y colores de un radial, en orden de emisión."""
    accepted = np.nonzero((row > product.lower_cutoff) & (row < product.upper_cutoff))[0]
    n = accepted.size
    vertices = np.zeros((n, VERTICES_PER_CELL, COMPONENTS_PER_VERTEX), dtype=np.float64)
    colors = np.empty((n, VERTICES_PER_CELL, COMPONENTS_PER_VERTEX), dtype=np.float64)
    if n == 0:
        return vertices.ravel(), colors.ravel()

    radius = product.cone_of_silence_radius
    resolution = product.scaled_resolution
    r_near = radius + resolution * accepted
    r_far = radius + resolution * (accepted + 1)

    a0 = radial_angle(i, angular_step_divisor, offset)
    a1 = radial_angle(i + 1, angular_step_divisor, offset)
    cos0, sin0 = math.cos(a0), math.sin(a0)
    cos1, sin1 = math.cos(a1), math.sin(a1)

    # Orden de emisión fijo; el renderer depende de este winding
    corners = (
        (r_far, cos1, sin1),
        (r_near, cos1, sin1),
        (r_far, cos0, sin0),
        (r_near, cos1, sin1),
        (r_near, cos0, sin0),
        (r_far, cos0, sin0),
    )
    for k, (r, c, s) in enumerate(corners):
        vertices[:, k, 0] = r * c
        vertices[:, k, 1] = r * s

    colormap = product.colormap
    for n_idx, j in enumerate(accepted):
        value = float(row[j])
        for k in range(VERTICES_PER_CELL):
            colors[n_idx, k] = interpolate_color(value, colormap, breakpoints, mode)

    return vertices.ravel(), colors.ravel()


def generate_mesh(
    start_azimuth: float,
    gates,
    product: RadarProduct,
    on_progress: Optional[ProgressCallback] = None,
    parallel: Optional[bool] = None,
    max_workers: Optional[int] = None,
    mode: Optional[str] = None,
) -> GeneratedMesh:
    """
    Recorre todas las celdas (radial, gate) y arma los buffers de la malla.

    Args:
        start_azimuth: Azimut inicial del barrido en grados.
        gates: Secuencia plana de valores, indexada como radial * gate_count + gate.
        product: Configuración resuelta del producto.
        on_progress: Recibe el porcentaje (0-100) tras cada radial completado.
        parallel: Procesa radiales en un pool de threads (orden final intacto).
        max_workers: Threads del pool en modo paralelo.
        mode: Modo de mezcla de color (ver interpolate_color).

    Returns:
        GeneratedMesh con vertices y colors float32 de solo lectura.
    """
    if parallel is None:
        parallel = settings.PARALLEL_SWEEP
    mode = mode or settings.COLOR_MIXING_MODE

    offset = azimuth_offset_radians(start_azimuth)
    angular_step_divisor = product.radial_count * 0.5
    breakpoints = product.breakpoints
    values = _prepare_values(gates, product)
    total = product.radial_count

    def build_row(i: int):
        return _row_mesh(i, values[i], product, angular_step_divisor, offset, breakpoints, mode)

    def report(completed: int) -> None:
        if on_progress is not None:
            on_progress(progress_percentage(completed, total))

    rows: List[Optional[Tuple[np.ndarray, np.ndarray]]] = [None] * total
    if parallel and total > 1:
        with ThreadPoolExecutor(max_workers=max_workers or settings.SWEEP_WORKERS) as executor:
            futures = {executor.submit(build_row, i): i for i in range(total)}
            completed = 0
            for future in as_completed(futures):
                rows[futures[future]] = future.result()
                completed += 1
                report(completed)
    else:
        for i in range(total):
            rows[i] = build_row(i)
            report(i + 1)

    vertices = np.concatenate([r[0] for r in rows] or [np.empty(0)]).astype(np.float32)
    colors = np.concatenate([r[1] for r in rows] or [np.empty(0)]).astype(np.float32)
    vertices.flags.writeable = False
    colors.flags.writeable = False

    logger.debug(
        "Malla generada para %r: %d vértices", product.product,
        vertices.size // COMPONENTS_PER_VERTEX,
    )
    return GeneratedMesh(vertices=vertices, colors=colors)
