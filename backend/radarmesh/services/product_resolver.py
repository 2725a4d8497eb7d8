"""
Resolución de producto: nombre del frame → colormap, cutoffs y geometría.
Nunca lanza; ante datos faltantes devuelve los defaults documentados.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.config import settings
from ..core.constants import PRODUCT_COLORMAPS, PRODUCT_CUTOFFS
from ..models import ProductTable, RadarFrame, RadarProduct

logger = logging.getLogger(__name__)


def build_product_tables(colormaps: Mapping, cutoffs: Mapping) -> Mapping[str, ProductTable]:
    """
    Arma la tabla de solo lectura {producto: ProductTable}.
    Solo incluye productos con cutoffs; el colormap puede faltar (queda vacío).
    """
    tables = {
        name: ProductTable(colormap=colormaps.get(name, {}), **entry)
        for name, entry in cutoffs.items()
    }
    return MappingProxyType(tables)


# Tabla global, inicializada una sola vez e inyectada en ProductResolver
PRODUCT_TABLES = build_product_tables(PRODUCT_COLORMAPS, PRODUCT_CUTOFFS)


class ProductResolver:
    """
    Mapea el nombre de producto a su configuración de render.

    Args:
        tables: Tabla {producto: ProductTable}. Default: PRODUCT_TABLES.
        default_product: Producto usado cuando el frame no trae nombre.
    """

    def __init__(
        self,
        tables: Optional[Mapping[str, ProductTable]] = None,
        default_product: Optional[str] = None,
    ):
        self.tables = PRODUCT_TABLES if tables is None else tables
        self.default_product = default_product or settings.DEFAULT_PRODUCT

    def lookup(self, name: Optional[str]) -> Optional[ProductTable]:
        """Devuelve la entrada para `name` (None → producto por defecto), o None."""
        key = self.default_product if name is None else name
        return self.tables.get(key)

    def resolve(self, frame: RadarFrame) -> RadarProduct:
        """
        Construye el RadarProduct de un frame.

        El colormap y los cutoffs usan el producto por defecto cuando el frame
        no trae nombre; la geometría se busca con el nombre tal cual llegó
        ("" si falta), por lo que en ese caso usa los defaults de settings.
        """
        product_name = frame.product_name or ""
        table = self.lookup(frame.product_name)
        geometry = self.tables.get(product_name)

        if table is None:
            logger.warning(
                "Producto sin configuración: %r, se usan defaults", frame.product_name
            )

        return RadarProduct(
            product=product_name,
            radial_count=frame.radial_count or settings.DEFAULT_RADIAL_COUNT,
            gate_count=frame.gate_count or settings.DEFAULT_GATE_COUNT,
            colormap=table.colormap if table else {},
            lower_cutoff=table.lower_cutoff if table else settings.DEFAULT_LOWER_CUTOFF,
            upper_cutoff=table.upper_cutoff if table else settings.DEFAULT_UPPER_CUTOFF,
            cone_of_silence_radius=(
                geometry.cone_of_silence_radius if geometry
                else settings.DEFAULT_CONE_OF_SILENCE_RADIUS
            ),
            scaled_resolution=(
                geometry.scaled_resolution if geometry
                else settings.DEFAULT_SCALED_RESOLUTION
            ),
        )
