from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.shared.schemas import ORMBaseModel

# ==================== REQUEST SCHEMAS ====================

class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Nombre de la categoría")

class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)

class BrandCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Nombre de la marca")

class BrandUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)

# ==================== RESPONSE SCHEMAS ====================

class CategoryResponse(ORMBaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

class BrandResponse(ORMBaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
