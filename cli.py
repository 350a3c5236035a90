# cli.py
import argparse
import asyncio
import sys
from typing import Any, Awaitable, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from gateway import AsyncQueryClient
from storefront.config import Settings, load_settings
from storefront.log import configure_logging
from storefront.models import ActionResult, ProductIn, image_path
from storefront.navigation import View
from storefront.state import StorefrontApp
from storefront.views import render, render_inquiry_form, show_status

console = Console()

# Shown once above the menu on the next redraw
status_message = ""

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#b35900 #ffffff',
    'completion-menu.completion.current': 'bg:#ff8000 #000000',
    'scrollbar.background': 'bg:#aa8866',
    'scrollbar.button': 'bg:#222222',
})

GLOBAL_OPTIONS = [("h", "🏠 Home"), ("c", "🧺 Catalog"), ("a", "🔒 Admin"), ("q", "👋 Quit")]
VIEW_OPTIONS = {
    View.HOME: [("b", "Browse Collection")],
    View.CATALOG: [("f", "Filter by category"), ("i", "✉️ Inquire about an item")],
    View.ADMIN_LOGIN: [("p", "Enter password")],
    View.ADMIN_DASHBOARD: [("t", "Switch tab"), ("n", "➕ Add item"), ("d", "🗑️ Delete item"),
                           ("l", "Logout")],
}


# ---------------------------
# Helpers
# ---------------------------
async def with_spinner(awaitable: Awaitable[Any], description: str = "Processing...") -> Any:
    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                  transient=True, console=console) as progress:
        progress.add_task(description=description, total=None)
        return await awaitable


def notice(result: ActionResult) -> None:
    # blocking notice: the user acknowledges before the screen redraws
    if result.cancelled or not result.message:
        return
    console.print(show_status(result.message, result.ok))
    Prompt.ask("[dim]Press enter to continue[/dim]", default="", show_default=False, console=console)


def ask_float(message: str, default: Optional[float] = None) -> float:
    while True:
        raw = Prompt.ask(message, default=None if default is None else str(default), console=console)
        try:
            return float(raw)
        except (TypeError, ValueError):
            console.print("[red]Please enter a valid number.[/red]")


def ask_required(message: str) -> str:
    while True:
        value = Prompt.ask(message, console=console).strip()
        if value:
            return value
        console.print("[red]This field is required.[/red]")


def pick(items: List[Any], label: str) -> Optional[Any]:
    if not items:
        console.print("[italic yellow]Nothing to choose from[/italic yellow]")
        return None
    raw = Prompt.ask(f"{label} number (1-{len(items)}, blank to cancel)", default="",
                     show_default=False, console=console).strip()
    if not raw:
        return None
    try:
        index = int(raw)
    except ValueError:
        index = 0
    if not 1 <= index <= len(items):
        console.print("[red]No such item.[/red]")
        return None
    return items[index - 1]


def menu_panel(view: View) -> Panel:
    menu_table = Table.grid(padding=(0, 2))
    menu_table.add_column("Key", style="bold cyan", width=4)
    menu_table.add_column("Option", width=28)
    for key, label in VIEW_OPTIONS[view] + GLOBAL_OPTIONS:
        menu_table.add_row(key, label)
    return Panel(menu_table, title="📋 Menu", border_style="yellow")


# ---------------------------
# Actions
# ---------------------------
async def inquire(app: StorefrontApp) -> None:
    product = pick(app.visible_products(), "Product")
    if product is None:
        return
    app.open_inquiry(product.id)
    console.print(render_inquiry_form(product))
    customer = ask_required("Your Name")
    contact = ask_required("Contact Number")
    message = Prompt.ask("Message", default="", show_default=False, console=console)
    task = app.submit_inquiry(customer, contact, message)
    notice(await with_spinner(task, "Sending inquiry..."))


async def add_item(app: StorefrontApp) -> None:
    app.open_add_product()
    console.print(Panel.fit("Add Product", border_style="orange3"))
    try:
        product = ProductIn(
            name=ask_required("Product Name"),
            category=ask_required("Category"),
            price=ask_float("Price"),
            image=image_path(Prompt.ask("Image Filename (e.g. bowl.jpg)", default="",
                                        show_default=False, console=console)),
            description=ask_required("Description"),
        )
    except ValidationError as e:
        app.cancel_add_product()
        console.print(show_status(f"Invalid product: {e.errors()[0]['msg']}", False))
        return
    if not Confirm.ask("Add this item?", default=True, console=console):
        app.cancel_add_product()
        return
    notice(await with_spinner(app.submit_new_product(product), "Adding product..."))


async def delete_item(app: StorefrontApp) -> None:
    product = pick(app.products, "Item")
    if product is None:
        return
    result = await app.delete_product(
        product.id, confirm=lambda q: Confirm.ask(f"[red]{q}[/red]", console=console))
    notice(result)


async def handle(app: StorefrontApp, choice: str, session: PromptSession) -> bool:
    global status_message
    view = app.view
    if choice in ("q", "quit", "exit"):
        return not Confirm.ask("Are you sure you want to quit?", console=console)
    if choice == "h":
        app.go_home()
    elif choice == "c" or (view == View.HOME and choice == "b"):
        app.go_catalog()
    elif choice == "a":
        app.go_admin()
    elif view == View.CATALOG and choice == "f":
        cats = app.categories()
        cat = await session.prompt_async("Category: ", completer=WordCompleter(cats), style=custom_style)
        if cat.strip() in cats:
            app.select_category(cat.strip())
        else:
            status_message = f"Unknown category {cat.strip()!r}"
    elif view == View.CATALOG and choice == "i":
        await inquire(app)
    elif view == View.ADMIN_LOGIN and choice == "p":
        app.login(Prompt.ask("Password", password=True, console=console))
    elif view == View.ADMIN_DASHBOARD and choice == "t":
        app.show_tab("inquiries" if app.tab == "products" else "products")
    elif view == View.ADMIN_DASHBOARD and choice == "n":
        await add_item(app)
    elif view == View.ADMIN_DASHBOARD and choice == "d":
        await delete_item(app)
    elif view == View.ADMIN_DASHBOARD and choice == "l":
        notice(ActionResult(ok=True, message=app.logout()))
    else:
        status_message = f"Unknown option {choice!r}"
    return True


# ---------------------------
# Main loop
# ---------------------------
async def run_storefront(settings: Settings) -> None:
    global status_message
    gateway = AsyncQueryClient(settings.gateway_url, api_key=settings.api_key, timeout=settings.timeout)
    app = StorefrontApp(gateway)
    session: PromptSession = PromptSession()

    console.clear()
    await with_spinner(app.start(), "Loading collection...")

    running = True
    while running:
        console.clear()
        console.print(render(app))
        if status_message:
            console.print(show_status(status_message, False))
            status_message = ""
        console.print(menu_panel(app.view))
        keys = [k for k, _ in VIEW_OPTIONS[app.view] + GLOBAL_OPTIONS]
        choice = (await session.prompt_async("Choose an option ", completer=WordCompleter(keys),
                                             style=custom_style)).strip().lower()
        running = await handle(app, choice, session)

    console.print(Panel.fit("[bold green]Thank you for visiting Dastkar Digital! 👋[/bold green]",
                            title="Goodbye"))


def serve(host: str, port: int) -> None:
    import uvicorn
    uvicorn.run("backend.main:app", host=host, port=port, log_level="info")


def seed(settings: Settings) -> None:
    from demo import SAMPLE_PRODUCTS
    from gateway import QueryClient

    c = QueryClient(base_url=settings.gateway_url, api_key=settings.api_key, timeout=settings.timeout)
    rows = c.table("products").insert([p.model_dump() for p in SAMPLE_PRODUCTS]).execute().raise_for_error()
    console.print(show_status(f"Seeded {len(rows)} products"))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dastkar Digital storefront")
    subparsers = parser.add_subparsers(dest="command")
    sv = subparsers.add_parser("serve", help="Run the in-memory data backend")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8085)
    subparsers.add_parser("seed", help="Insert sample products into the backend")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level, console=console)

    if args.command == "serve":
        serve(args.host, args.port)
    elif args.command == "seed":
        seed(settings)
    else:
        asyncio.run(run_storefront(settings))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
