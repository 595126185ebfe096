from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ORMBaseModel
from app.modules.catalog.schemas import BrandResponse, CategoryResponse
from app.modules.sellers.schemas import SellerResponse

# ==================== REQUEST SCHEMAS ====================

class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Nombre del producto")
    price: Decimal = Field(..., gt=0, description="Precio unitario")
    stock: int = Field(0, ge=0, description="Stock inicial (se registra como compra)")
    description: Optional[str] = Field(None, description="Descripción")
    size: Optional[str] = Field(None, description="Tamaño / presentación")
    category_id: Optional[int] = Field(None, description="Categoría")
    brand_id: Optional[int] = Field(None, description="Marca")
    seller_id: Optional[int] = Field(None, description="Proveedor del stock inicial")

class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = None
    size: Optional[str] = None
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    seller_id: Optional[int] = None

class AddStockRequest(BaseModel):
    seller_id: int = Field(..., description="Proveedor de la reposición")
    stock: int = Field(..., gt=0, description="Unidades que ingresan")

# ==================== RESPONSE SCHEMAS ====================

class ProductResponse(ORMBaseModel):
    id: int
    name: str
    price: Decimal
    stock: int
    description: Optional[str] = None
    size: Optional[str] = None
    category: Optional[CategoryResponse] = None
    brand: Optional[BrandResponse] = None
    seller: Optional[SellerResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ProductCountResponse(BaseModel):
    total_quantity: int = 0
