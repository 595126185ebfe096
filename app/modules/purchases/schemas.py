from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ORMBaseModel

class PurchaseResponse(ORMBaseModel):
    id: int
    seller_id: Optional[int] = None
    product_id: Optional[int] = None
    seller_name: Optional[str] = None
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    created_at: Optional[datetime] = None
