# storefront/views.py
from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from .catalog import featured, format_price
from .models import Inquiry, Product
from .navigation import View
from .state import StorefrontApp

BRAND = "Dastkar[orange3]Digital[/orange3]"


# ---------------------------
# Shared pieces
# ---------------------------
def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def create_header(app: StorefrontApp):
    header = Table(show_header=False, box=box.ROUNDED, expand=True)
    header.add_column("brand", width=30)
    header.add_column("nav", justify="right")

    def link(label: str, active: bool) -> str:
        return f"[bold orange3]{label}[/bold orange3]" if active else label

    admin_label = "👤 Dashboard" if app.session.authenticated else "🔒 Admin"
    header.add_row(
        f"🔨 [bold]{BRAND}[/bold]",
        "   ".join([
            link("Home", app.view == View.HOME),
            link("Catalog", app.view == View.CATALOG),
            link(admin_label, app.navigator.in_admin),
        ]),
    )
    return header


def render_loading():
    return Panel(Spinner("dots", text="Loading..."), border_style="orange3")


def product_card(product: Product, index: Optional[int] = None, read_only: bool = False):
    body = Text()
    body.append(f"{product.category.upper()}\n", style="dim")
    body.append(f"{product.name}\n", style="bold")
    if product.description:
        body.append(f"{product.description}\n", style="italic")
    body.append(format_price(product.price), style="bold orange3")
    title = None if index is None else f"[{index}]"
    subtitle = None if read_only else "Inquire"
    return Panel(body, title=title, subtitle=subtitle, width=36, border_style="grey50")


def _grid(cards: List[Panel], columns: int):
    grid = Table.grid(padding=(0, 1))
    for _ in range(columns):
        grid.add_column()
    for start in range(0, len(cards), columns):
        row = cards[start:start + columns]
        grid.add_row(*(row + [""] * (columns - len(row))))
    return grid


# ---------------------------
# Home
# ---------------------------
def render_home(app: StorefrontApp):
    hero = Panel(
        Text.from_markup(
            "[bold]Handcrafted with Soul.[/bold]\n"
            "Bridging the gap between local master artisans and the digital world.\n\n"
            "[orange3]Browse Collection ›[/orange3]",
            justify="center",
        ),
        style="on grey15",
    )
    items = featured(app.products)
    if items:
        section = _grid([product_card(p, read_only=True) for p in items], columns=4)
    else:
        section = Panel("No products yet. Go to Admin > Dashboard to add some!", style="dim")
    return Group(hero, Text("Featured Items", style="bold"), section)


# ---------------------------
# Catalog
# ---------------------------
def render_catalog(app: StorefrontApp):
    chips = Text()
    for cat in app.categories():
        style = "reverse bold" if cat == app.category else "dim"
        chips.append(f" {cat} ", style=style)
        chips.append(" ")

    visible = app.visible_products()
    if visible:
        body = _grid([product_card(p, index=i) for i, p in enumerate(visible, start=1)], columns=3)
    else:
        body = Panel("No products found. Add some in the Admin Dashboard!", style="dim")
    return Group(Text("Our Catalog", style="bold"), chips, body)


def render_inquiry_form(product: Product):
    return Panel.fit(
        f"[dim]INQUIRING ABOUT[/dim]\n[bold]{product.name}[/bold]",
        title="✉️ Send Inquiry",
        border_style="orange3",
    )


# ---------------------------
# Admin
# ---------------------------
def render_admin_login(app: StorefrontApp):
    lines = "[bold]Artisan Access[/bold]\nEnter the password to open the dashboard."
    if app.login_error:
        lines += f"\n[red]{app.login_error}[/red]"
    return Panel.fit(lines, title="🔒", border_style="grey50")


def show_inventory(products: List[Product]):
    table = Table(
        title="Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True,
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Category", width=16)
    table.add_column("Price", justify="right", width=12)

    for i, p in enumerate(products, start=1):
        table.add_row(str(i), p.name, p.category, format_price(p.price))
    if not products:
        return Group(table, Text("Inventory is empty.", style="italic yellow"))
    return table


def _when(created_at: Optional[str]) -> str:
    if not created_at:
        return "Recent"
    try:
        return datetime.fromisoformat(created_at).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return created_at


def show_inquiries(inquiries: List[Inquiry]):
    if not inquiries:
        return Text("No inquiries yet.", style="italic yellow")
    panels = []
    for inq in inquiries:
        body = Text()
        body.append(f"{inq.customer}", style="bold")
        body.append(f"  {inq.contact}\n", style="dim")
        body.append("Interested in ", style="dim")
        body.append(f"{inq.product}\n", style="orange3")
        if inq.message:
            body.append(f'"{inq.message}"\n', style="italic")
        body.append(_when(inq.created_at), style="dim")
        panels.append(Panel(body, subtitle=inq.status, border_style="grey50"))
    return Group(*panels)


def render_dashboard(app: StorefrontApp):
    tabs = Text()
    for tab in ("products", "inquiries"):
        tabs.append(f" {tab.title()} ", style="reverse bold" if app.tab == tab else "dim")
        tabs.append(" ")
    body = show_inventory(app.products) if app.tab == "products" else show_inquiries(app.inquiries)
    return Group(Text("Dashboard", style="bold"), tabs, body)


# ---------------------------
# Page
# ---------------------------
def render(app: StorefrontApp):
    if app.loading:
        return Group(create_header(app), render_loading())
    screens = {
        View.HOME: render_home,
        View.CATALOG: render_catalog,
        View.ADMIN_LOGIN: render_admin_login,
        View.ADMIN_DASHBOARD: render_dashboard,
    }
    return Group(create_header(app), screens[app.view](app))
