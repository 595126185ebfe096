# app/modules/sales/service.py
import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.shared.database.models import Sale
from app.shared.query import count_total, parse_query, sort_and_paginate
from app.shared.services.base import BaseService, Payload, payload_to_dict
from .repository import SalesRepository
from .schemas import DailyRevenue, MonthlyRevenue, WeeklyRevenue, YearlyRevenue

logger = logging.getLogger(__name__)

class SalesService(BaseService):
    """
    Servicio principal para las operaciones de ventas
    """

    def __init__(self, db: Session):
        super().__init__(db, Sale, "Sale")
        self.repository = SalesRepository(db)

    # ==================== REGISTRO DE VENTAS ====================

    def create(self, payload: Payload, user_id: int) -> Sale:
        """
        Registrar venta y descontar el stock del producto.

        El descuento de stock y el insert de la venta van en la misma
        transacción cuando está disponible.
        """
        sale_data = payload_to_dict(payload)
        quantity = int(sale_data.get("quantity") or 0)
        product_price = Decimal(str(sale_data.get("product_price") or 0))

        if quantity <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Quantity must be greater than 0"
            )

        # 1. Validar producto y stock disponible
        product = self.repository.get_product(sale_data.get("product_id"), user_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product not found"
            )

        if quantity > product.stock:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{quantity} products are not available in stock!"
            )

        new_sale = {
            "user_id": user_id,
            "product_id": product.id,
            "product_name": sale_data.get("product_name") or product.name,
            "product_price": product_price,
            "quantity": quantity,
            "total_price": product_price * quantity,
            "buyer_name": sale_data.get("buyer_name"),
            "date": sale_data.get("date")
        }

        try:
            # 2. Descontar stock
            updated = self.repository.decrease_product_stock(product.id, quantity)
            if not updated:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{quantity} products are not available in stock!"
                )
            self._checkpoint()

            # 3. Crear la venta
            sale = self.repository.create_sale(new_sale)
            self._checkpoint()

            if self.transactional:
                self.db.commit()

        except Exception as e:
            logger.error(f"Error registrando venta del producto {product.id}: {e}")
            self.db.rollback()
            detail = e.detail if isinstance(e, HTTPException) else (str(e) or "Unknown error")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Sale create failed: {detail}"
            )

        self.db.refresh(sale)
        logger.info(f"Venta {sale.id} registrada: {quantity} x {sale.product_name}")
        return sale

    # ==================== CONSULTAS ====================

    def read_all(self, query: Optional[Dict[str, Any]] = None, user_id: int = None) -> Dict[str, Any]:
        """
        Ventas del usuario, con búsqueda por producto o comprador.

        total_count cuenta todas las ventas del usuario, sin aplicar la búsqueda.
        """
        params = parse_query(query)

        data = sort_and_paginate(
            self.repository.search_sales(user_id, params.search), Sale, params
        ).all()

        return {
            "data": data,
            "total_count": count_total(self.repository.user_sales(user_id))
        }

    def read(self, sale_id: int, user_id: int) -> Optional[Sale]:
        self._is_exists(sale_id)
        return self.repository.get_sale_with_product(sale_id, user_id)

    # ==================== REPORTES DE INGRESOS ====================

    def read_all_daily(self, user_id: int) -> List[DailyRevenue]:
        rows = self.repository.revenue_rollup(user_id, ("year", "month", "day"))
        return [
            DailyRevenue(
                day=int(row.day),
                month=int(row.month),
                year=int(row.year),
                total_quantity=int(row.total_quantity or 0),
                total_revenue=float(row.total_revenue or 0)
            )
            for row in rows
        ]

    def read_all_weeks(self, user_id: int) -> List[WeeklyRevenue]:
        """
        Ingresos por semana ISO.

        La base agrupa por día y aquí se pliega a (año ISO, semana ISO):
        los últimos días de diciembre pueden caer en la semana 1 del año
        siguiente y los primeros de enero en la 52/53 del anterior.
        """
        weeks = OrderedDict()

        for day in self.read_all_daily(user_id):
            iso_year, iso_week, _ = date(day.year, day.month, day.day).isocalendar()
            totals = weeks.setdefault((iso_year, iso_week), [0, Decimal("0")])
            totals[0] += day.total_quantity
            totals[1] += Decimal(str(day.total_revenue))

        return [
            WeeklyRevenue(
                week=week,
                year=year,
                total_quantity=quantity,
                total_revenue=float(revenue)
            )
            for (year, week), (quantity, revenue) in sorted(weeks.items())
        ]

    def read_all_months(self, user_id: int) -> List[MonthlyRevenue]:
        rows = self.repository.revenue_rollup(user_id, ("year", "month"))
        return [
            MonthlyRevenue(
                month=int(row.month),
                year=int(row.year),
                total_quantity=int(row.total_quantity or 0),
                total_revenue=float(row.total_revenue or 0)
            )
            for row in rows
        ]

    def read_all_yearly(self, user_id: int) -> List[YearlyRevenue]:
        rows = self.repository.revenue_rollup(user_id, ("year",))
        return [
            YearlyRevenue(
                year=int(row.year),
                total_quantity=int(row.total_quantity or 0),
                total_revenue=float(row.total_revenue or 0)
            )
            for row in rows
        ]
