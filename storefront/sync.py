# storefront/sync.py
import asyncio
import logging
from typing import Callable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gateway import QueryResult
from .models import (
    ActionResult, Inquiry, InquiryIn, Product, ProductIn, INQUIRY_STATUS_NEW,
)

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"
INQUIRIES_TABLE = "inquiries"

DELETE_PROMPT = "Are you sure you want to delete this item?"

M = TypeVar("M", bound=BaseModel)


class DataSyncController:
    """
    Owns the in-memory product and inquiry collections.

    The collections are only ever replaced wholesale by ``refresh()``: callers
    see either the previous snapshot or the new one. Every successful product
    mutation is followed by a full refresh. Overlapping refreshes are resolved
    by generation: only the most recently issued refresh may write state.
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self.products: List[Product] = []
        self.inquiries: List[Inquiry] = []
        # true until the first refresh settles
        self.loading = True
        self._generation = 0

    async def _execute(self, query) -> QueryResult:
        try:
            return await query.execute()
        except Exception as e:
            logger.exception("gateway call on %s raised", query.table)
            return QueryResult(error=str(e) or e.__class__.__name__)

    def _rows(self, result: QueryResult, model: Type[M], table: str) -> List[M]:
        if not result.ok:
            logger.error("Error fetching %s: %s", table, result.error)
            return []
        rows = []
        for row in result.data or []:
            try:
                rows.append(model.model_validate(row))
            except ValidationError as e:
                logger.error("Error fetching %s: skipping malformed row: %s", table, e)
        return rows

    async def refresh(self) -> bool:
        self._generation += 1
        generation = self._generation
        self.loading = True

        products_res, inquiries_res = await asyncio.gather(
            self._execute(self.gateway.table(PRODUCTS_TABLE).select().order("created_at", desc=True)),
            self._execute(self.gateway.table(INQUIRIES_TABLE).select().order("created_at", desc=True)),
        )

        if generation != self._generation:
            logger.debug("discarding refresh %d, superseded by %d", generation, self._generation)
            return False

        self.products = self._rows(products_res, Product, PRODUCTS_TABLE)
        self.inquiries = self._rows(inquiries_res, Inquiry, INQUIRIES_TABLE)
        self.loading = False
        return True

    async def add_product(self, product: ProductIn) -> ActionResult:
        result = await self._execute(self.gateway.table(PRODUCTS_TABLE).insert([product.model_dump()]))
        if not result.ok:
            logger.warning("add product %r failed: %s", product.name, result.error)
            return ActionResult(ok=False, message=f"Error adding product: {result.error}")
        logger.info("added product %r", product.name)
        await self.refresh()
        return ActionResult(ok=True, message="Product Added Successfully!")

    async def delete_product(self, product_id: str, confirm: Callable[[str], bool]) -> ActionResult:
        if not confirm(DELETE_PROMPT):
            return ActionResult(ok=False, cancelled=True)
        result = await self._execute(self.gateway.table(PRODUCTS_TABLE).delete().eq("id", product_id))
        if not result.ok:
            logger.warning("delete product %s failed: %s", product_id, result.error)
            return ActionResult(ok=False, message=f"Error deleting: {result.error}")
        logger.info("deleted product %s", product_id)
        await self.refresh()
        return ActionResult(ok=True, message="Product deleted")

    async def add_inquiry(self, inquiry: InquiryIn) -> ActionResult:
        row = dict(inquiry.model_dump(), status=INQUIRY_STATUS_NEW)
        result = await self._execute(self.gateway.table(INQUIRIES_TABLE).insert([row]))
        if not result.ok:
            logger.warning("inquiry for %r failed: %s", inquiry.product, result.error)
            return ActionResult(ok=False, message=f"Error sending inquiry: {result.error}")
        # the inquiry list is left as is until the next refresh
        logger.info("inquiry sent for %r", inquiry.product)
        return ActionResult(ok=True, message="Inquiry Sent! The artisan will contact you shortly.")
