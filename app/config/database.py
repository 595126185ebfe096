from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from .settings import settings

# Create engine
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_recycle=300,
    echo=settings.debug
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Database dependency
def get_db():
    """Sesión de base de datos por petición"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def supports_transactions(db: Session) -> bool:
    """
    Indica si las escrituras de varios pasos deben ir en una sola transacción.
    
    Con use_transactions desactivado cada paso se confirma por separado,
    igual que un despliegue sin soporte transaccional.
    """
    return settings.use_transactions and db.bind is not None
