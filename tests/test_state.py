# tests/test_state.py
import asyncio

import pytest

from gateway import AsyncQueryClient
from storefront.models import ProductIn
from storefront.navigation import View
from storefront.session import ADMIN_SECRET, LOGIN_ERROR
from storefront.state import LOGOUT_NOTICE, StorefrontApp
from conftest import product_row


@pytest.fixture
def app(fake_gateway):
    fake_gateway.tables["products"] = [
        product_row("3", "Khes Throw", "Weaving"),
        product_row("2", "Clay Bowl", "Pottery"),
        product_row("1", "Vase", "Pottery"),
    ]
    a = StorefrontApp(fake_gateway)
    asyncio.run(a.start())
    return a


def _login(app):
    assert app.login(ADMIN_SECRET).ok


def test_starts_home_unauthenticated(fake_gateway):
    a = StorefrontApp(fake_gateway)
    assert a.view == View.HOME
    assert a.loading is True
    assert a.session.authenticated is False


def test_start_refreshes_once(fake_gateway):
    a = StorefrontApp(fake_gateway)
    asyncio.run(a.start())
    assert fake_gateway.count("GET", "products") == 1
    assert a.loading is False


def test_navigation(app):
    assert app.go_catalog() == View.CATALOG
    assert app.go_home() == View.HOME
    assert app.go_admin() == View.ADMIN_LOGIN
    _login(app)
    app.go_home()
    assert app.go_admin() == View.ADMIN_DASHBOARD


def test_login_success_goes_to_dashboard(app):
    app.go_admin()
    result = app.login(ADMIN_SECRET)
    assert result.ok
    assert app.session.authenticated
    assert app.view == View.ADMIN_DASHBOARD
    assert app.login_error == ""


@pytest.mark.parametrize("password", ["", "admin", "admin123", ADMIN_SECRET.upper(), ADMIN_SECRET + " "])
def test_login_mismatch_changes_nothing(app, password):
    app.go_admin()
    result = app.login(password)
    assert not result.ok
    assert app.session.authenticated is False
    assert app.view == View.ADMIN_LOGIN
    assert app.login_error == LOGIN_ERROR


@pytest.mark.parametrize("authenticated", [True, False])
def test_logout_always_resets(app, authenticated):
    if authenticated:
        _login(app)
    else:
        app.go_catalog()
    assert app.logout() == LOGOUT_NOTICE
    assert app.session.authenticated is False
    assert app.view == View.HOME


def test_category_filter(app):
    assert app.categories() == ["All", "Weaving", "Pottery"]
    app.select_category("Pottery")
    assert [p.name for p in app.visible_products()] == ["Clay Bowl", "Vase"]
    app.select_category("All")
    assert len(app.visible_products()) == 3


def test_inquiry_submission_scenario(app, fake_gateway):
    gets_before = fake_gateway.count("GET")

    async def scenario():
        app.open_inquiry("2")
        assert app.inquiry_product.name == "Clay Bowl"
        task = app.submit_inquiry("Asha", "555-0100", "")
        # closed before the request completes
        assert app.inquiry_product_id is None
        assert not task.done()
        return await task

    result = asyncio.run(scenario())
    assert result.ok
    assert fake_gateway.calls[-1][3] == [{"product": "Clay Bowl", "customer": "Asha",
                                           "contact": "555-0100", "message": "", "status": "New"}]
    assert fake_gateway.count("GET") == gets_before


def test_inquiry_form_closes_even_when_send_fails(app, fake_gateway):
    fake_gateway.fail[("POST", "inquiries")] = "offline"

    async def scenario():
        app.open_inquiry("3")
        task = app.submit_inquiry("Asha", "555-0100", "Is it washable?")
        assert app.inquiry_product_id is None
        return await task

    result = asyncio.run(scenario())
    assert result.message == "Error sending inquiry: offline"
    assert app.inquiry_product_id is None


def test_open_inquiry_unknown_product(app):
    assert app.open_inquiry("missing") is None
    assert app.inquiry_product_id is None


def test_mutations_require_login(app, fake_gateway):
    result = asyncio.run(app.submit_new_product(ProductIn(name="x", category="y", price=1)))
    assert not result.ok
    result = asyncio.run(app.delete_product("1", lambda q: True))
    assert not result.ok
    assert fake_gateway.count("POST") == 0 and fake_gateway.count("DELETE") == 0


def test_mutations_refused_while_loading(fake_gateway):
    a = StorefrontApp(fake_gateway)
    a.login(ADMIN_SECRET)
    result = asyncio.run(a.submit_new_product(ProductIn(name="x", category="y", price=1)))
    assert not result.ok
    assert fake_gateway.calls == []


def test_add_product_form_closes_and_refreshes(app):
    _login(app)
    app.open_add_product()
    result = asyncio.run(app.submit_new_product(ProductIn(name="Box", category="Woodwork", price=4800)))
    assert result.ok
    assert app.add_product_open is False
    assert app.products[0].name == "Box"
    assert "Woodwork" in app.categories()


def test_delete_through_dashboard(app):
    _login(app)
    result = asyncio.run(app.delete_product("2", lambda q: True))
    assert result.ok
    assert [p.id for p in app.products] == ["3", "1"]


def test_tabs(app):
    app.show_tab("inquiries")
    assert app.tab == "inquiries"
    with pytest.raises(ValueError):
        app.show_tab("orders")


def test_start_with_unusable_gateway_url_settles():
    a = StorefrontApp(AsyncQueryClient("http://[::1"))
    asyncio.run(a.start())
    assert a.loading is False
    assert a.products == [] and a.inquiries == []

    _login(a)
    result = asyncio.run(a.submit_new_product(ProductIn(name="x", category="y", price=1)))
    assert not result.ok
    assert result.message.startswith("Error adding product: ")
