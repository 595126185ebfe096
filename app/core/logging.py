import logging
import sys
from typing import Optional

from app.config.settings import settings

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configurar logging de la aplicación.
    
    En modo debug el nivel es DEBUG; si no, el de settings.log_level.
    """
    log_level = level or ("DEBUG" if settings.debug else settings.log_level)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())
    
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(settings.log_format or DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    
    # SQLAlchemy solo loguea SQL en debug
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
    
    logging.getLogger(__name__).info(
        f"{settings.app_name} v{settings.version} - logging {log_level.upper()}"
    )
