# backend/models.py
from pydantic import BaseModel
from typing import Dict, FrozenSet

class TableSchema(BaseModel):
    name: str
    columns: FrozenSet[str]
    required: FrozenSet[str] = frozenset()

# id and created_at are assigned by the backend on insert
SCHEMAS: Dict[str, TableSchema] = {
    "products": TableSchema(
        name="products",
        columns=frozenset({"id", "name", "category", "price", "description", "image", "created_at"}),
        required=frozenset({"name", "category", "price"}),
    ),
    "inquiries": TableSchema(
        name="inquiries",
        columns=frozenset({"id", "product", "customer", "contact", "message", "status", "created_at"}),
        required=frozenset({"product", "customer", "contact"}),
    ),
}
