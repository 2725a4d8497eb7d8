"""
Interpolación de color sobre colormaps de breakpoints (valor → RGB 0-255).

La búsqueda de los breakpoints vecinos es una búsqueda binaria sobre las
claves ordenadas de forma ascendente (ProductTable/RadarProduct garantizan
el orden al construirse). Fuera del rango del colormap se usa el breakpoint
más cercano para ambos lados.
"""
from __future__ import annotations

import logging
import math
from bisect import bisect_left
from typing import Mapping, Optional, Sequence, Tuple

from ..core.config import settings
from ..core.errors import DegenerateInterpolation

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)


def round_half_up(x: float) -> int:
    """Redondeo al entero más cercano con empates hacia +inf."""
    return int(math.floor(x + 0.5))


def neighbour_breakpoints(value: float, breakpoints: Sequence[float]) -> Tuple[float, float]:
    """
    Devuelve (key_color1, key_color2): el breakpoint más cercano <= value y
    el más cercano >= value. Si falta uno de los dos, se repite el otro.
    """
    idx = bisect_left(breakpoints, value)
    if idx < len(breakpoints) and breakpoints[idx] == value:
        return value, value
    lower = breakpoints[idx - 1] if idx > 0 else None
    upper = breakpoints[idx] if idx < len(breakpoints) else None
    if lower is None:
        lower = upper
    if upper is None:
        upper = lower
    return lower, upper


def interpolation_ratio(value: float, key1: float, key2: float) -> float:
    """
    Raises:
        DegenerateInterpolation: tramo de ancho cero o ratio no finito.
    """
    span = key2 - key1
    if span == 0:
        raise DegenerateInterpolation(f"Tramo de ancho cero en breakpoint {key1}")
    ratio = (value - key1) / span
    if not math.isfinite(ratio):
        raise DegenerateInterpolation(f"Ratio no finito para valor {value}")
    return ratio


def interpolate_color(
    value: float,
    colormap: Mapping[float, Sequence[int]],
    breakpoints: Optional[Sequence[float]] = None,
    mode: Optional[str] = None,
) -> Color:
    """
    Color RGB en [0, 1] para `value`.

    Args:
        value: Intensidad de la muestra.
        colormap: Breakpoints ascendentes → [R, G, B] en 0-255.
        breakpoints: Claves ordenadas del colormap (se calculan si faltan).
        mode: "legacy" mezcla el canal rojo con color1[1]; "corrected" con
            color1[0]. Default: settings.COLOR_MIXING_MODE.

    Returns:
        Tupla (r, g, b). Coincidencia exacta: canal / 255 sin redondeo.
        Interpolado: cada canal redondeado a entero, / 255, y a 2 decimales.
        En modo "legacy" el canal rojo puede quedar fuera de [0, 1] (p. ej.
        negativo); "corrected" siempre queda dentro del rango.
    """
    exact = colormap.get(value)
    if exact is not None:
        return (exact[0] / 255, exact[1] / 255, exact[2] / 255)

    if breakpoints is None:
        breakpoints = tuple(colormap)
    if not breakpoints:
        return BLACK

    key1, key2 = neighbour_breakpoints(value, breakpoints)
    color1, color2 = colormap[key1], colormap[key2]

    try:
        ratio = interpolation_ratio(value, key1, key2)
    except DegenerateInterpolation as e:
        logger.debug("%s; se usa color1 sin modificar", e)
        return (color1[0] / 255, color1[1] / 255, color1[2] / 255)

    if (mode or settings.COLOR_MIXING_MODE) == "legacy":
        red_base = color1[1]
    else:
        red_base = color1[0]

    r = round_half_up(color1[0] + (color2[0] - red_base) * ratio) / 255
    g = round_half_up(color1[1] + (color2[1] - color1[1]) * ratio) / 255
    b = round_half_up(color1[2] + (color2[2] - color1[2]) * ratio) / 255

    return (round(r, 2), round(g, 2), round(b, 2))
