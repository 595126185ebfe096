# app/modules/purchases/service.py
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.shared.database.models import Purchase
from app.shared.services.base import BaseService

class PurchaseService(BaseService):
    """
    Historial de compras (entradas de stock).

    Las compras no se crean desde aquí: las genera ProductService al crear un
    producto o al reponer stock.
    """

    search_fields = ("product_name", "seller_name")

    def __init__(self, db: Session):
        super().__init__(db, Purchase, "Purchase")

    def create(self, payload, user_id):
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Purchases are created from products"
        )

    def update(self, record_id, payload):
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Purchases cannot be edited"
        )
