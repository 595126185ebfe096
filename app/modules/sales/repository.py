# app/modules/sales/repository.py
from typing import List, Optional, Sequence
from sqlalchemy.orm import Query, Session, joinedload
from sqlalchemy import extract, func, or_

from app.shared.database.models import Product, Sale

class SalesRepository:
    """
    Repositorio para todas las operaciones de datos relacionadas con ventas
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== PRODUCTOS ====================

    def get_product(self, product_id: Optional[int], user_id: int) -> Optional[Product]:
        """Producto del usuario; None si no existe o es de otro usuario"""
        if product_id is None:
            return None
        product = self.db.get(Product, product_id)
        if product is None or product.user_id != user_id:
            return None
        return product

    def decrease_product_stock(self, product_id: int, quantity: int) -> int:
        """
        Decrementar stock después de venta.

        El UPDATE solo aplica si hay stock suficiente, así el stock no queda
        negativo aunque otra venta se haya registrado en paralelo. Retorna
        filas afectadas (0 = sin stock).
        """
        return self.db.query(Product)\
            .filter(Product.id == product_id, Product.stock >= quantity)\
            .update({Product.stock: Product.stock - quantity}, synchronize_session=False)

    # ==================== VENTAS ====================

    def create_sale(self, sale_data: dict) -> Sale:
        sale = Sale(**sale_data)
        self.db.add(sale)
        return sale

    def get_sale_with_product(self, sale_id: int, user_id: int) -> Optional[Sale]:
        return self.db.query(Sale)\
            .options(joinedload(Sale.product))\
            .filter(Sale.id == sale_id, Sale.user_id == user_id)\
            .first()

    def user_sales(self, user_id: int) -> Query:
        return self.db.query(Sale).filter(Sale.user_id == user_id)

    def search_sales(self, user_id: int, search: str) -> Query:
        query = self.user_sales(user_id)
        if search:
            query = query.filter(or_(
                Sale.product_name.ilike(f"%{search}%"),
                Sale.buyer_name.ilike(f"%{search}%")
            ))
        return query

    # ==================== REPORTES ====================

    def revenue_rollup(self, user_id: int, parts: Sequence[str]) -> List:
        """
        Cantidad e ingresos agrupados por partes de la fecha
        ("year", "month", "day"), en orden ascendente.

        Ventas sin fecha quedan fuera.
        """
        keys = [extract(part, Sale.date) for part in parts]

        return self.db.query(
            *[key.label(part) for key, part in zip(keys, parts)],
            func.sum(Sale.quantity).label("total_quantity"),
            func.sum(Sale.total_price).label("total_revenue")
        ).filter(
            Sale.user_id == user_id,
            Sale.date.isnot(None)
        ).group_by(*keys)\
            .order_by(*keys)\
            .all()
