from .client import QueryClient, AsyncQueryClient, QueryBuilder, QueryResult, GatewayError

__all__ = ["QueryClient", "AsyncQueryClient", "QueryBuilder", "QueryResult", "GatewayError"]
