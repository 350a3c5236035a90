# storefront/state.py
import asyncio
import logging
from typing import Callable, Optional

from .catalog import ALL, filter_products, categories
from .models import ActionResult, InquiryIn, Product, ProductIn
from .navigation import Navigator, View
from .session import SessionGuard
from .sync import DataSyncController

logger = logging.getLogger(__name__)

LOGOUT_NOTICE = "Logged out successfully"
TABS = ("products", "inquiries")


class StorefrontApp:
    """
    Application state container: the sync controller, session guard and
    navigator plus the transient view state. Views read from it; user actions
    go through its methods.
    """

    def __init__(self, gateway):
        self.controller = DataSyncController(gateway)
        self.session = SessionGuard()
        self.navigator = Navigator(self.session)

        self.category = ALL
        self.inquiry_product_id: Optional[str] = None
        self.add_product_open = False
        self.tab = "products"
        self.login_error = ""

    # ---------------------------
    # Read side
    # ---------------------------
    @property
    def view(self) -> View:
        return self.navigator.current

    @property
    def loading(self) -> bool:
        return self.controller.loading

    @property
    def products(self):
        return self.controller.products

    @property
    def inquiries(self):
        return self.controller.inquiries

    def categories(self):
        return categories(self.controller.products)

    def visible_products(self):
        return filter_products(self.controller.products, self.category)

    def find_product(self, product_id: str) -> Optional[Product]:
        for p in self.controller.products:
            if p.id == product_id:
                return p
        return None

    @property
    def inquiry_product(self) -> Optional[Product]:
        if self.inquiry_product_id is None:
            return None
        return self.find_product(self.inquiry_product_id)

    # ---------------------------
    # Lifecycle
    # ---------------------------
    async def start(self) -> None:
        await self.controller.refresh()

    # ---------------------------
    # Navigation and session
    # ---------------------------
    def go_home(self) -> View:
        return self.navigator.home()

    def go_catalog(self) -> View:
        return self.navigator.catalog()

    def go_admin(self) -> View:
        return self.navigator.admin()

    def login(self, password: str) -> ActionResult:
        result = self.session.login(password)
        if result.ok:
            self.login_error = ""
            self.navigator.login_succeeded()
        else:
            self.login_error = result.message
        return result

    def logout(self) -> str:
        self.session.logout()
        self.navigator.home()
        self.add_product_open = False
        return LOGOUT_NOTICE

    # ---------------------------
    # Catalog and inquiries
    # ---------------------------
    def select_category(self, category: str) -> None:
        self.category = category

    def open_inquiry(self, product_id: str) -> Optional[Product]:
        product = self.find_product(product_id)
        if product is not None:
            self.inquiry_product_id = product.id
        return product

    def close_inquiry(self) -> None:
        self.inquiry_product_id = None

    def submit_inquiry(self, customer: str, contact: str, message: str = "") -> "asyncio.Task[ActionResult]":
        """
        Close the form and send the inquiry in the background. The returned
        task resolves to the notice for the shopper. Must run inside an event
        loop.
        """
        loop = asyncio.get_running_loop()
        product = self.inquiry_product
        self.close_inquiry()
        if product is None:
            raise LookupError("no inquiry form is open")
        inquiry = InquiryIn(product=product.name, customer=customer, contact=contact, message=message or "")
        return loop.create_task(self.controller.add_inquiry(inquiry))

    # ---------------------------
    # Admin dashboard
    # ---------------------------
    def show_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"unknown tab {tab!r}")
        self.tab = tab

    def open_add_product(self) -> None:
        self.add_product_open = True

    def cancel_add_product(self) -> None:
        self.add_product_open = False

    def _guard_mutation(self) -> Optional[ActionResult]:
        if not self.session.authenticated:
            return ActionResult(ok=False, message="Admin login required")
        if self.controller.loading:
            return ActionResult(ok=False, message="Still loading, try again in a moment")
        return None

    async def submit_new_product(self, product: ProductIn) -> ActionResult:
        refused = self._guard_mutation()
        if refused is not None:
            return refused
        self.add_product_open = False
        return await self.controller.add_product(product)

    async def delete_product(self, product_id: str, confirm: Callable[[str], bool]) -> ActionResult:
        refused = self._guard_mutation()
        if refused is not None:
            return refused
        return await self.controller.delete_product(product_id, confirm)
