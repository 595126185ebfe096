# app/modules/products/__init__.py
"""
Módulo de Productos

- Alta de producto + compra del stock inicial (transaccional)
- Reposición de stock + compra (transaccional)
- Listado con filtros (búsqueda, precio, categoría, marca, proveedor)
- Total de unidades en stock para el dashboard
- Borrado múltiple

Arquitectura:
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "ProductService",
    "ProductRepository"
]
