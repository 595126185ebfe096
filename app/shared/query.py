# app/shared/query.py
"""
Helpers de consulta compartidos: paginación, ordenamiento y conteo total.

Todos los listados reciben un diccionario "suelto" (query params tal como
llegan) y lo normalizan con parse_query().
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.config.settings import settings

DEFAULT_SORT_FIELD = "created_at"

@dataclass
class QueryParams:
    page: int
    limit: int
    sort_by: str
    sort_order: str
    search: str

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

def parse_query(query: Optional[Dict[str, Any]] = None) -> QueryParams:
    """
    Normalizar parámetros de listado.

    Acepta tanto camelCase (sortBy, sortOrder) como snake_case.
    """
    query = query or {}

    page = max(_to_int(query.get("page"), 1), 1)
    limit = _to_int(query.get("limit"), settings.default_page_size)
    if limit < 1:
        limit = settings.default_page_size
    limit = min(limit, settings.max_page_size)

    sort_by = query.get("sortBy") or query.get("sort_by") or DEFAULT_SORT_FIELD
    sort_order = str(query.get("sortOrder") or query.get("sort_order") or "desc").lower()
    if sort_order not in ("asc", "desc"):
        sort_order = "desc"

    return QueryParams(
        page=page,
        limit=limit,
        sort_by=str(sort_by),
        sort_order=sort_order,
        search=str(query.get("search") or "").strip()
    )

def sort_and_paginate(query: Query, model, params: QueryParams) -> Query:
    """
    Aplicar ORDER BY + OFFSET/LIMIT.

    Solo se ordena por columnas reales del modelo; cualquier otro valor de
    sortBy cae en created_at.
    """
    column = model.__table__.columns.get(params.sort_by)
    if column is None:
        column = model.__table__.columns[DEFAULT_SORT_FIELD]

    direction = asc if params.sort_order == "asc" else desc

    # id como desempate para que la paginación sea estable
    return query.order_by(direction(column), direction(model.id))\
        .offset(params.offset)\
        .limit(params.limit)

def count_total(query: Query) -> int:
    """Total de registros que cumplen el filtro (sin paginación)"""
    return query.order_by(None).count()
