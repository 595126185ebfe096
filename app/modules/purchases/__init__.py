# app/modules/purchases/__init__.py
"""
Módulo de Compras - registro de auditoría de entradas de stock
"""

from .service import PurchaseService

__all__ = [
    "PurchaseService"
]
