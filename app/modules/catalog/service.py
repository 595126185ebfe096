# app/modules/catalog/service.py
from sqlalchemy.orm import Session

from app.shared.database.models import Brand, Category
from app.shared.services.base import BaseService
from .schemas import BrandUpdateRequest, CategoryUpdateRequest

class CategoryService(BaseService):
    """Categorías de producto del usuario"""

    update_schema = CategoryUpdateRequest

    def __init__(self, db: Session):
        super().__init__(db, Category, "Category")

class BrandService(BaseService):
    """Marcas de producto del usuario"""

    update_schema = BrandUpdateRequest

    def __init__(self, db: Session):
        super().__init__(db, Brand, "Brand")
