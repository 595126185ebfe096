from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ORMBaseModel

# ==================== REQUEST SCHEMAS ====================

class SaleCreateRequest(BaseModel):
    product_id: int = Field(..., description="Producto vendido")
    product_price: Decimal = Field(..., gt=0, description="Precio unitario cobrado")
    quantity: int = Field(..., gt=0, description="Cantidad")
    buyer_name: str = Field(..., min_length=1, description="Nombre del comprador")
    product_name: Optional[str] = Field(None, description="Si no se envía se toma del producto")
    date: Optional[datetime] = Field(None, description="Fecha de la venta")

    @field_validator('buyer_name')
    @classmethod
    def strip_buyer_name(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError('El nombre del comprador es obligatorio')
        return v

# ==================== RESPONSE SCHEMAS ====================

class SaleProductInfo(ORMBaseModel):
    id: int
    name: str
    price: Decimal
    stock: int

class SaleResponse(ORMBaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    product_price: Decimal
    quantity: int
    total_price: Decimal
    buyer_name: str
    date: Optional[datetime] = None
    product: Optional[SaleProductInfo] = None
    created_at: Optional[datetime] = None

# ==================== REPORTES ====================

class RevenueTotals(BaseModel):
    total_quantity: int = 0
    total_revenue: float = 0.0

class DailyRevenue(RevenueTotals):
    day: int
    month: int
    year: int

class WeeklyRevenue(RevenueTotals):
    week: int = Field(..., description="Semana ISO (1-53)")
    year: int = Field(..., description="Año ISO de la semana")

class MonthlyRevenue(RevenueTotals):
    month: int
    year: int

class YearlyRevenue(RevenueTotals):
    year: int
