# app/shared/services/base.py
import logging
from typing import Any, Dict, Iterable, Optional, Type, Union

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.config.database import supports_transactions
from app.shared.query import count_total, parse_query, sort_and_paginate

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Dict[str, Any]]

def payload_to_dict(payload: Payload, exclude_unset: bool = False) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=exclude_unset)
    return dict(payload)

class BaseService:
    """
    CRUD genérico sobre un modelo con dueño (user_id).

    Los servicios de dominio heredan de aquí y solo sobrescriben lo que
    tiene reglas propias (creación transaccional, filtros, reportes).
    """

    # Columnas donde busca el parámetro "search"
    search_fields: Iterable[str] = ("name",)

    # Esquema con el que se validan los payloads de update enviados como dict
    update_schema: Optional[Type[BaseModel]] = None

    def __init__(self, db: Session, model, model_name: str):
        self.db = db
        self.model = model
        self.model_name = model_name

    # ==================== TRANSACCIONES ====================

    @property
    def transactional(self) -> bool:
        return supports_transactions(self.db)

    def _checkpoint(self) -> None:
        """
        Cerrar un paso de una escritura de varios pasos.

        Dentro de una transacción solo hace flush (se confirma al final);
        sin transacción cada paso queda confirmado por separado.
        """
        if self.transactional:
            self.db.flush()
        else:
            self.db.commit()

    # ==================== HELPERS ====================

    def _is_exists(self, record_id: int):
        record = self.db.get(self.model, record_id)
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.model_name} not found"
            )
        return record

    def _owned_query(self, user_id: int) -> Query:
        return self.db.query(self.model).filter(self.model.user_id == user_id)

    def _apply_search(self, query: Query, search: str) -> Query:
        if not search:
            return query
        return query.filter(or_(*[
            getattr(self.model, field).ilike(f"%{search}%")
            for field in self.search_fields
        ]))

    # ==================== CRUD ====================

    def create(self, payload: Payload, user_id: int):
        data = payload_to_dict(payload)
        data["user_id"] = user_id

        record = self.model(**data)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)

        logger.info(f"{self.model_name} {record.id} creado por usuario {user_id}")
        return record

    def read_all(self, query: Optional[Dict[str, Any]] = None, user_id: int = None) -> Dict[str, Any]:
        params = parse_query(query)

        base_query = self._apply_search(self._owned_query(user_id), params.search)
        data = sort_and_paginate(base_query, self.model, params).all()

        return {
            "data": data,
            "total_count": count_total(base_query)
        }

    def read(self, record_id: int, user_id: int):
        """
        Obtener un registro del usuario.

        404 si el id no existe; None si existe pero pertenece a otro usuario.
        """
        self._is_exists(record_id)
        return self._owned_query(user_id).filter(self.model.id == record_id).first()

    def _validate_update(self, payload: Payload) -> Payload:
        if self.update_schema is None or isinstance(payload, BaseModel):
            return payload
        try:
            return self.update_schema.model_validate(payload)
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors()
            )

    def update(self, record_id: int, payload: Payload):
        record = self._is_exists(record_id)
        payload = self._validate_update(payload)

        for key, value in payload_to_dict(payload, exclude_unset=True).items():
            if key in ("id", "user_id"):
                continue
            if hasattr(record, key):
                setattr(record, key, value)

        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, record_id: int):
        record = self._is_exists(record_id)

        self.db.delete(record)
        self.db.commit()

        logger.info(f"{self.model_name} {record_id} eliminado")
        return record
