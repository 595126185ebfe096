from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.config.database import Base

class TimestampMixin:
    """Mixin para timestamps automáticos"""
    created_at = Column(DateTime, server_default=func.current_timestamp(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

# ===== USUARIOS =====

class User(Base, TimestampMixin):
    """Dueño de todos los registros (productos, ventas, compras...)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="user")
    sales = relationship("Sale", back_populates="user")

# ===== CATÁLOGO =====

class Category(Base, TimestampMixin):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    products = relationship("Product", back_populates="category")

class Brand(Base, TimestampMixin):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    products = relationship("Product", back_populates="brand")

class Seller(Base, TimestampMixin):
    """Proveedor del que se compra el stock"""
    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    contact_no = Column(String(50))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    products = relationship("Product", back_populates="seller")
    purchases = relationship("Purchase", back_populates="seller")

# ===== PRODUCTOS =====

class Product(Base, TimestampMixin):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    description = Column(Text)
    size = Column(String(50))
    category_id = Column(Integer, ForeignKey("categories.id"))
    brand_id = Column(Integer, ForeignKey("brands.id"))
    seller_id = Column(Integer, ForeignKey("sellers.id"))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="products_stock_not_negative"),
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    brand = relationship("Brand", back_populates="products")
    seller = relationship("Seller", back_populates="products")
    user = relationship("User", back_populates="products")
    sales = relationship("Sale", back_populates="product")
    purchases = relationship("Purchase", back_populates="product")

# ===== COMPRAS =====

class Purchase(Base, TimestampMixin):
    """Registro de entrada de stock - se genera al crear producto o reponer stock"""
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"))
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"))
    seller_name = Column(String(255))
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)

    # Relationships
    seller = relationship("Seller", back_populates="purchases")
    product = relationship("Product", back_populates="purchases")

# ===== VENTAS =====

class Sale(Base, TimestampMixin):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"))
    product_name = Column(String(255), nullable=False)
    product_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    buyer_name = Column(String(255), nullable=False)
    date = Column(DateTime, index=True)  # NULL = no cuenta en los reportes

    # Relationships
    user = relationship("User", back_populates="sales")
    product = relationship("Product", back_populates="sales")
