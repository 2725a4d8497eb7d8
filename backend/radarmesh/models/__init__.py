"""
Modelos de dominio del worker.
Divididos por responsabilidad funcional.
"""
from .frame import RadarFrame
from .product import RGB, ProductTable, RadarProduct
from .messages import ProgressMessage, WorkerResult, ResultMessage, FailureMessage

__all__ = [
    # Frame
    'RadarFrame',
    # Product
    'RGB',
    'ProductTable',
    'RadarProduct',
    # Messages
    'ProgressMessage',
    'WorkerResult',
    'ResultMessage',
    'FailureMessage',
]
