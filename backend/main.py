# backend/main.py
from fastapi import FastAPI, Request, Body, Query
from typing import Optional, Dict, Any, List, Union

from fastapi.middleware.cors import CORSMiddleware

from .core import select_logic, insert_logic, delete_logic
from .database import clear_all

app = FastAPI(title="dastkar data backend (in-memory)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _filter_params(request: Request) -> Dict[str, str]:
    return {k: v for k, v in request.query_params.items() if k != "order"}

# ---------------------------
# Table endpoints
# ---------------------------
@app.get("/rest/{table}")
async def select_rows(table: str, request: Request, order: Optional[str] = Query(None)):
    return await select_logic(table, order, _filter_params(request))

@app.post("/rest/{table}", status_code=201)
async def insert_rows(table: str, payload: Union[List[Dict[str, Any]], Dict[str, Any]] = Body(...)):
    return await insert_logic(table, payload)

@app.delete("/rest/{table}")
async def delete_rows(table: str, request: Request):
    return await delete_logic(table, _filter_params(request))

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    clear_all()
    return {"status": "reset"}
