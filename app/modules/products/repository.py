# app/modules/products/repository.py
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Query, Session, joinedload
from sqlalchemy import func

from app.shared.database.models import Product, Purchase, Seller

def _to_decimal(value: Any) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None

def _to_id(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

class ProductRepository:
    """
    Repositorio para las operaciones de datos de productos y sus compras.

    No hace commit: la confirmación la decide el servicio.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== LECTURA ====================

    def get_product(self, product_id: int, user_id: Optional[int] = None) -> Optional[Product]:
        """Producto por id; con user_id solo si pertenece a ese usuario"""
        product = self.db.get(Product, product_id)
        if product is None or (user_id is not None and product.user_id != user_id):
            return None
        return product

    def get_seller(self, seller_id: Optional[int]) -> Optional[Seller]:
        if seller_id is None:
            return None
        return self.db.get(Seller, seller_id)

    def filtered_query(self, filters: Dict[str, Any], user_id: int) -> Query:
        """
        Productos del usuario con los filtros del listado aplicados.

        Filtros soportados: search, minPrice, maxPrice, category, brand,
        seller, size. Los valores que no se pueden interpretar se ignoran.
        """
        query = self.db.query(Product).filter(Product.user_id == user_id)

        search = str(filters.get("search") or "").strip()
        if search:
            query = query.filter(Product.name.ilike(f"%{search}%"))

        min_price = _to_decimal(filters.get("minPrice"))
        if min_price is not None and min_price.is_finite():
            query = query.filter(Product.price >= min_price)

        max_price = _to_decimal(filters.get("maxPrice"))
        if max_price is not None and max_price.is_finite():
            query = query.filter(Product.price <= max_price)

        for param, column in (
            ("category", Product.category_id),
            ("brand", Product.brand_id),
            ("seller", Product.seller_id),
        ):
            value = _to_id(filters.get(param))
            if value is not None:
                query = query.filter(column == value)

        size = filters.get("size")
        if size:
            query = query.filter(Product.size == size)

        return query

    def with_relations(self, query: Query) -> Query:
        return query.options(
            joinedload(Product.category),
            joinedload(Product.brand),
            joinedload(Product.seller)
        )

    def sum_stock(self, user_id: int) -> int:
        total = self.db.query(func.sum(Product.stock))\
            .filter(Product.user_id == user_id)\
            .scalar()
        return int(total or 0)

    # ==================== ESCRITURA ====================

    def create_product(self, product_data: dict) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        return product

    def increment_stock(self, product_id: int, quantity: int) -> int:
        """Sumar stock de forma atómica. Retorna filas afectadas."""
        return self.db.query(Product)\
            .filter(Product.id == product_id)\
            .update({Product.stock: Product.stock + quantity}, synchronize_session=False)

    def create_purchase(
        self,
        user_id: int,
        seller: Seller,
        product: Product,
        quantity: int
    ) -> Purchase:
        """
        Registrar la entrada de stock con los nombres desnormalizados,
        para que el historial sobreviva a cambios en producto/proveedor.
        """
        unit_price = Decimal(str(product.price))

        purchase = Purchase(
            user_id=user_id,
            seller_id=seller.id,
            product_id=product.id,
            seller_name=seller.name,
            product_name=product.name,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity
        )
        self.db.add(purchase)
        return purchase

    def bulk_delete(self, product_ids: List[int]) -> int:
        if not product_ids:
            return 0
        return self.db.query(Product)\
            .filter(Product.id.in_(product_ids))\
            .delete(synchronize_session=False)
