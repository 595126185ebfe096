from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.shared.schemas import ORMBaseModel

class SellerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Nombre del proveedor")
    email: Optional[str] = Field(None, description="Correo de contacto")
    contact_no: Optional[str] = Field(None, description="Teléfono de contacto")

class SellerUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    contact_no: Optional[str] = None

class SellerResponse(ORMBaseModel):
    id: int
    name: str
    email: Optional[str] = None
    contact_no: Optional[str] = None
    created_at: Optional[datetime] = None
