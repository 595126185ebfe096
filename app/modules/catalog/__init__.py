# app/modules/catalog/__init__.py
"""
Módulo de Catálogo - categorías y marcas a las que se asocian los productos.

Solo CRUD: no tiene reglas de negocio propias.
"""

from .service import CategoryService, BrandService

__all__ = [
    "CategoryService",
    "BrandService"
]
