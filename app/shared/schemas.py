from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal

class ORMBaseModel(BaseModel):
    """
    Clase base para todos los esquemas de respuesta,
    con configuración de Pydantic v2.
    """
    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={
            Decimal: float,
            datetime: lambda v: v.isoformat(),
        }
    )
