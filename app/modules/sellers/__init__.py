# app/modules/sellers/__init__.py
"""
Módulo de Proveedores

Cada compra (entrada de stock) queda asociada a un proveedor.
"""

from .service import SellerService

__all__ = [
    "SellerService"
]
