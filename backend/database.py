# backend/database.py
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, List, Optional

# In-memory tables and per-table write locks.

TABLES: Dict[str, List[Dict[str, Any]]] = {
    "products": [],
    "inquiries": [],
}
_LOCKS: Dict[str, asyncio.Lock] = {}
_LAST_CREATED: Optional[datetime] = None

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]

def next_created_at() -> str:
    # strictly increasing, so created_at ordering never ties
    global _LAST_CREATED
    now = datetime.now(timezone.utc)
    if _LAST_CREATED is not None and now <= _LAST_CREATED:
        now = _LAST_CREATED + timedelta(microseconds=1)
    _LAST_CREATED = now
    return now.strftime("%Y-%m-%dT%H:%M:%S.%f+00:00")

def clear_all():
    global _LAST_CREATED
    for rows in TABLES.values():
        rows.clear()
    _LOCKS.clear()
    _LAST_CREATED = None
