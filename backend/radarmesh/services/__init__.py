"""
Servicios del pipeline frame → malla.

Estructura:
- decompressor: header de tamaño + bloque zlib
- frame_codec: wire format protobuf de RadarFrame
- product_resolver: tablas de colormap/cutoffs/geometría por producto
- color_interpolation: color por valor sobre breakpoints
- mesh_generator: barrido radial × gate → vértices y colores
- result_packager: armado del mensaje final
"""
from .decompressor import decompress_frame, compress_frame
from .frame_codec import decode_frame, encode_frame
from .product_resolver import ProductResolver, PRODUCT_TABLES, build_product_tables
from .color_interpolation import interpolate_color
from .mesh_generator import GeneratedMesh, generate_mesh
from .result_packager import package_result

__all__ = [
    'decompress_frame',
    'compress_frame',
    'decode_frame',
    'encode_frame',
    'ProductResolver',
    'PRODUCT_TABLES',
    'build_product_tables',
    'interpolate_color',
    'GeneratedMesh',
    'generate_mesh',
    'package_result',
]
