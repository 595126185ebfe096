# app/modules/sales/__init__.py
"""
Módulo de Ventas

- Registro de ventas con descuento de stock (transaccional)
- Listado con búsqueda por producto o comprador
- Reportes de ingresos diarios, semanales (ISO), mensuales y anuales

Arquitectura:
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "SalesService",
    "SalesRepository"
]
