# gateway/client.py
import httpx
import requests
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class GatewayError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class QueryResult(BaseModel):
    """
    Outcome of one gateway call: either ``data`` or a human-readable ``error``.
    """
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> Any:
        if self.error is not None:
            raise GatewayError(self.error, self.status_code)
        return self.data


def _error_message(resp: Any) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # FastAPI request validation errors
        detail = "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
    return str(detail) if detail else f"HTTP {resp.status_code}: {resp.text}"


def _to_result(resp: Any) -> QueryResult:
    if resp.status_code >= 400:
        return QueryResult(error=_error_message(resp), status_code=resp.status_code)
    try:
        data = resp.json()
    except ValueError:
        return QueryResult(error=f"HTTP {resp.status_code}: response is not JSON", status_code=resp.status_code)
    return QueryResult(data=data, status_code=resp.status_code)


class QueryBuilder:
    """
    Table-scoped query, built fluently and sent with ``execute()``:

        client.table("products").select().order("created_at", desc=True).execute()
        client.table("products").insert([row]).execute()
        client.table("products").delete().eq("id", pid).execute()

    ``execute()`` returns a QueryResult for QueryClient and an awaitable
    QueryResult for AsyncQueryClient.
    """

    def __init__(self, client: Any, table: str):
        self._client = client
        self.table = table
        self.method = "GET"
        self.params: Dict[str, str] = {}
        self.payload: Optional[List[Dict[str, Any]]] = None

    def select(self) -> "QueryBuilder":
        self.method = "GET"
        return self

    def insert(self, rows: Union[Dict[str, Any], List[Dict[str, Any]]]) -> "QueryBuilder":
        self.method = "POST"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def delete(self) -> "QueryBuilder":
        self.method = "DELETE"
        return self

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        self.params[column] = f"eq.{value}"
        return self

    def order(self, column: str, desc: bool = False) -> "QueryBuilder":
        self.params["order"] = f"{column}.{'desc' if desc else 'asc'}"
        return self

    def execute(self):
        return self._client.request(self.method, self.table, params=self.params, payload=self.payload)


class QueryClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: float = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def table(self, name: str) -> QueryBuilder:
        return QueryBuilder(self, name)

    def request(self, method: str, table: str, params: Optional[Dict[str, str]] = None,
                payload: Any = None) -> QueryResult:
        try:
            r = self.session.request(method, f"{self.base_url}/rest/{table}",
                                     params=params or {}, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            return QueryResult(error=str(e) or e.__class__.__name__)
        return _to_result(r)

    def reset(self) -> QueryResult:
        try:
            r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        except requests.RequestException as e:
            return QueryResult(error=str(e) or e.__class__.__name__)
        return _to_result(r)


class AsyncQueryClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: float = 10, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers: Dict[str, str] = {}
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

    def table(self, name: str) -> QueryBuilder:
        return QueryBuilder(self, name)

    async def request(self, method: str, table: str, params: Optional[Dict[str, str]] = None,
                      payload: Any = None) -> QueryResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers,
                                         transport=self.transport) as client:
                r = await client.request(method, f"{self.base_url}/rest/{table}",
                                         params=params or {}, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL is not an HTTPError
            return QueryResult(error=str(e) or e.__class__.__name__)
        return _to_result(r)
