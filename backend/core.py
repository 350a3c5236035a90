# backend/core.py
import logging
import uuid
from typing import Optional, Dict, Any, List, Tuple, Union

from fastapi import HTTPException

from .database import TABLES, _get_lock, next_created_at
from .models import SCHEMAS, TableSchema

logger = logging.getLogger(__name__)

# This file contains the query logic behind the /rest endpoints.

def _schema(table: str) -> TableSchema:
    schema = SCHEMAS.get(table)
    if schema is None:
        raise HTTPException(status_code=404, detail=f"relation '{table}' does not exist")
    return schema

def _check_column(schema: TableSchema, column: str):
    if column not in schema.columns:
        raise HTTPException(status_code=400, detail=f"column '{column}' does not exist on '{schema.name}'")

def parse_order(schema: TableSchema, order: Optional[str]) -> Optional[Tuple[str, bool]]:
    """
    "created_at.desc" -> ("created_at", True). A bare column sorts ascending.
    """
    if not order:
        return None
    column, _, direction = order.partition(".")
    _check_column(schema, column)
    if direction not in ("", "asc", "desc"):
        raise HTTPException(status_code=400, detail=f"invalid order direction '{direction}'")
    return column, direction == "desc"

def parse_filters(schema: TableSchema, params: Dict[str, str]) -> Dict[str, str]:
    filters = {}
    for column, expr in params.items():
        _check_column(schema, column)
        op, _, value = expr.partition(".")
        if op != "eq":
            raise HTTPException(status_code=400, detail=f"unsupported operator '{op}' on '{column}'")
        filters[column] = value
    return filters

def _matches(row: Dict[str, Any], filters: Dict[str, str]) -> bool:
    for column, value in filters.items():
        if row.get(column) is None or str(row[column]) != value:
            return False
    return True

def _make_row(schema: TableSchema, payload: Dict[str, Any]) -> Dict[str, Any]:
    for column in payload:
        _check_column(schema, column)
    for column in schema.required:
        if payload.get(column) is None:
            raise HTTPException(
                status_code=400,
                detail=f'null value in column "{column}" of relation "{schema.name}" violates not-null constraint',
            )
    row = {column: None for column in schema.columns}
    row.update(payload)
    row["id"] = uuid.uuid4().hex
    row["created_at"] = next_created_at()
    return row

async def select_logic(table: str, order: Optional[str] = None, params: Optional[Dict[str, str]] = None):
    schema = _schema(table)
    ordering = parse_order(schema, order)
    filters = parse_filters(schema, params or {})
    out = [dict(r) for r in TABLES[table] if _matches(r, filters)]
    if ordering:
        column, desc = ordering
        # nulls always sort last
        present = [r for r in out if r.get(column) is not None]
        present.sort(key=lambda r: r[column], reverse=desc)
        out = present + [r for r in out if r.get(column) is None]
    return out

async def insert_logic(table: str, payload: Union[Dict[str, Any], List[Dict[str, Any]]]):
    schema = _schema(table)
    rows_in = payload if isinstance(payload, list) else [payload]
    if not rows_in:
        raise HTTPException(status_code=400, detail="empty insert")

    lock = _get_lock(f"table:{table}")
    await lock.acquire()
    try:
        # validate everything before writing anything
        rows = [_make_row(schema, r) for r in rows_in]
        TABLES[table].extend(rows)
        logger.info("inserted %d row(s) into %s", len(rows), table)
        return [dict(r) for r in rows]
    finally:
        lock.release()

async def delete_logic(table: str, params: Dict[str, str]):
    schema = _schema(table)
    filters = parse_filters(schema, params)
    if not filters:
        raise HTTPException(status_code=400, detail="DELETE requires a filter")

    lock = _get_lock(f"table:{table}")
    await lock.acquire()
    try:
        kept, deleted = [], []
        for r in TABLES[table]:
            (deleted if _matches(r, filters) else kept).append(r)
        TABLES[table][:] = kept
        logger.info("deleted %d row(s) from %s", len(deleted), table)
        return deleted
    finally:
        lock.release()
