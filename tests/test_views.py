# tests/test_views.py
import asyncio

import pytest
from rich.console import Console

from storefront.session import ADMIN_SECRET
from storefront.state import StorefrontApp
from storefront.views import render
from conftest import product_row


def _text(renderable) -> str:
    console = Console(record=True, width=160)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def app(fake_gateway):
    fake_gateway.tables["products"] = [product_row(str(i), f"Item {i}", "Pottery", 1000 + i) for i in range(6)]
    fake_gateway.tables["inquiries"] = [{"id": "i1", "product": "Item 0", "customer": "Asha",
                                         "contact": "555-0100", "message": "Still available?",
                                         "status": "New", "created_at": None}]
    a = StorefrontApp(fake_gateway)
    asyncio.run(a.start())
    return a


def test_spinner_until_loaded(fake_gateway):
    text = _text(render(StorefrontApp(fake_gateway)))
    assert "Loading" in text
    assert "Featured Items" not in text


def test_home_shows_four_featured(app):
    text = _text(render(app))
    assert "Handcrafted with Soul." in text
    assert "Item 3" in text and "Item 4" not in text
    assert "Rs. 1,000" in text


def test_home_empty(fake_gateway):
    a = StorefrontApp(fake_gateway)
    asyncio.run(a.start())
    assert "No products yet" in _text(render(a))


def test_catalog_lists_filtered(app):
    app.go_catalog()
    text = _text(render(app))
    assert "Our Catalog" in text and "Item 5" in text
    app.select_category("Weaving")
    assert "No products found" in _text(render(app))


def test_login_error_inline(app):
    app.go_admin()
    app.login("nope")
    assert "Invalid Password" in _text(render(app))


def test_dashboard_tabs(app):
    app.go_admin()
    app.login(ADMIN_SECRET)
    text = _text(render(app))
    assert "Inventory" in text and "Item 5" in text and "Dashboard" in text
    app.show_tab("inquiries")
    text = _text(render(app))
    assert "Asha" in text and "Still available?" in text and "Recent" in text
