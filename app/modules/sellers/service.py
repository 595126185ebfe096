# app/modules/sellers/service.py
from sqlalchemy.orm import Session

from app.shared.database.models import Seller
from app.shared.services.base import BaseService
from .schemas import SellerUpdateRequest

class SellerService(BaseService):
    """
    Proveedores del usuario. Los productos y las compras los referencian.
    """

    search_fields = ("name", "email")
    update_schema = SellerUpdateRequest

    def __init__(self, db: Session):
        super().__init__(db, Seller, "Seller")
