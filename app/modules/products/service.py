# app/modules/products/service.py
import logging
from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.shared.database.models import Product
from app.shared.query import count_total, parse_query, sort_and_paginate
from app.shared.services.base import BaseService, Payload, payload_to_dict
from .repository import ProductRepository
from .schemas import ProductCountResponse, ProductUpdateRequest

logger = logging.getLogger(__name__)

def _error_detail(error: Exception) -> str:
    if isinstance(error, HTTPException):
        return str(error.detail)
    return str(error) or "Unknown error"

class ProductService(BaseService):
    """
    Servicio de productos: alta con compra inicial, reposición de stock,
    listados filtrados y contadores del dashboard.
    """

    update_schema = ProductUpdateRequest

    def __init__(self, db: Session):
        super().__init__(db, Product, "Product")
        self.repository = ProductRepository(db)

    # ==================== ALTA DE PRODUCTO ====================

    def create(self, payload: Payload, user_id: int) -> Product:
        """
        Crear producto y registrar la compra de su stock inicial.

        Ambos inserts van en la misma transacción cuando está disponible.
        """
        # Quitar campos vacíos del payload
        product_data = {
            key: value for key, value in payload_to_dict(payload).items() if value
        }
        product_data["user_id"] = user_id

        try:
            # 1. El proveedor debe existir
            seller = self.repository.get_seller(product_data.get("seller_id"))
            if not seller:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Seller not found"
                )

            # 2. Crear producto
            product = self.repository.create_product(product_data)
            self._checkpoint()

            # 3. Registrar compra del stock inicial
            self.repository.create_purchase(
                user_id=user_id,
                seller=seller,
                product=product,
                quantity=product.stock or 0
            )
            self._checkpoint()

            if self.transactional:
                self.db.commit()

        except Exception as e:
            logger.error(f"Error creando producto: {e}")
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Product create failed: {_error_detail(e)}"
            )

        self.db.refresh(product)
        logger.info(f"Producto {product.id} creado con stock {product.stock}")
        return product

    # ==================== REPOSICIÓN DE STOCK ====================

    def add_to_stock(self, product_id: int, payload: Payload, user_id: int) -> Product:
        """
        Sumar stock a un producto existente y registrar la compra.
        """
        stock_data = payload_to_dict(payload)
        quantity = int(stock_data.get("stock") or 0)

        try:
            product = self.repository.get_product(product_id, user_id)
            if not product:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Product not found"
                )

            if quantity <= 0:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Stock to add must be greater than 0"
                )

            seller = self.repository.get_seller(stock_data.get("seller_id"))
            if not seller:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Seller not found"
                )

            self.repository.increment_stock(product.id, quantity)
            self._checkpoint()

            self.repository.create_purchase(
                user_id=user_id,
                seller=seller,
                product=product,
                quantity=quantity
            )
            self._checkpoint()

            if self.transactional:
                self.db.commit()

        except Exception as e:
            logger.error(f"Error sumando stock al producto {product_id}: {e}")
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Product create failed: {_error_detail(e)}"
            )

        self.db.refresh(product)
        logger.info(f"Producto {product.id}: +{quantity} unidades (stock {product.stock})")
        return product

    # ==================== CONSULTAS ====================

    def count_total_product(self, user_id: int) -> ProductCountResponse:
        """Unidades totales en stock del usuario"""
        return ProductCountResponse(total_quantity=self.repository.sum_stock(user_id))

    def read_all(self, query: Optional[Dict[str, Any]] = None, user_id: int = None) -> Dict[str, Any]:
        query = query or {}
        params = parse_query(query)

        filtered = self.repository.filtered_query(query, user_id)
        data = sort_and_paginate(
            self.repository.with_relations(filtered), Product, params
        ).all()

        return {
            "data": data,
            "total_count": count_total(filtered)
        }

    def bulk_delete(self, product_ids: List[int]) -> int:
        deleted = self.repository.bulk_delete([int(pid) for pid in product_ids])
        self.db.commit()

        logger.info(f"{deleted} productos eliminados")
        return deleted
