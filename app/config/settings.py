from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # App Info
    app_name: str = "Inventory API"
    version: str = "1.0.0"
    debug: bool = False
    
    # Database
    database_url: str = "sqlite:///./inventory.db"
    use_transactions: bool = True  # False = cada paso de escritura hace commit propio
    
    # Paginación
    default_page_size: int = 10
    max_page_size: int = 100
    
    # Logging
    log_level: str = "INFO"
    log_format: Optional[str] = None
    
    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
