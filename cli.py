# cli.py
import asyncio
import logging
import math
import sys
from datetime import datetime
from typing import Awaitable, List, Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from adminsdk import AdminClient
from admin_console.config import Settings
from admin_console.controllers import (
    CategoriesController, CrudController, ProductsController, UsersController
)
from admin_console.forms import ProductForm, UserForm, parse_emails
from admin_console.logs import setup_logging
from admin_console.views import show_categories, show_products, show_status, show_users

console = Console()
logger = logging.getLogger("adminstore.cli")
_session: Optional[PromptSession] = None

T = TypeVar("T")

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Helpers
# ---------------------------
async def busy(awaitable: Awaitable[T], description: str = "Processing...") -> T:
    """Await a controller call behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
        console=console,
    ) as progress:
        progress.add_task(description=description, total=None)
        return await awaitable


def report(controller: CrudController, ok: bool, success_msg: str) -> None:
    if ok:
        console.print(show_status(success_msg, True))
    elif controller.store.error:
        console.print(show_status(controller.store.error, False))


async def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    global _session
    if _session is None:
        _session = PromptSession()
    return await _session.prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)


async def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = await prompt_with_autocomplete(message, default=f"{default:g}")
        try:
            value = float(raw)
        except ValueError:
            value = math.nan
        if math.isfinite(value):
            return value
        console.print("[red]Please enter a valid number.[/red]")


async def confirm(message: str, default: bool = False) -> bool:
    hint = "[Y/n]" if default else "[y/N]"
    answer = (await prompt_with_autocomplete(f"{message} {hint}",
                                             completer=WordCompleter(["y", "n"]))).strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def id_completer(controller: CrudController) -> WordCompleter:
    # only real ids: positional keys are for display only
    return WordCompleter([i.id for i in controller.store.items if i.id], ignore_case=True)


async def pick_id(controller: CrudController, message: str) -> Optional[str]:
    item_id = (await prompt_with_autocomplete(message, completer=id_completer(controller))).strip()
    if controller.store.find(item_id) is None:
        console.print(f"[yellow]No {controller.entity_name} with id '{escape(item_id)}'[/yellow]")
        return None
    return item_id


def page_menu(title: str, options: List[tuple]) -> Panel:
    menu_table = Table.grid(padding=(0, 2))
    menu_table.add_column("Key", style="bold cyan", width=4)
    menu_table.add_column("Option", width=30)
    for row in options:
        menu_table.add_row(*row)
    return Panel(menu_table, title=title, border_style="yellow")


def create_header(settings: Settings) -> Panel:
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Admin Store",
        f"[bold blue]{settings.api_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Users page
# ---------------------------
async def users_page(client: AdminClient):
    ctl = UsersController(client)
    await busy(ctl.load(), "Loading users...")
    try:
        while True:
            console.print(show_users(ctl.store))
            console.print(page_menu("👤 Users", [
                ("1", "🔍 Search by username"), ("2", "➕ Create user"),
                ("3", "✏️ Edit balance"), ("4", "🗑️ Delete user"),
                ("5", "🔄 Reload"), ("b", "⬅️ Back"),
            ]))
            choice = (await prompt_with_autocomplete("Choose an option")).strip().lower()

            if choice == "1":
                ctl.search(await prompt_with_autocomplete("Search by username", default=ctl.store.query))

            elif choice == "2":
                username = await prompt_with_autocomplete("Username")
                balance = await ask_float("💰 Balance", default=0.0)
                created = await busy(ctl.create(UserForm(username=username, balance=balance)))
                report(ctl, created is not None, f"User '{username.strip()}' created")

            elif choice == "3":
                user_id = await pick_id(ctl, "User ID")
                if user_id:
                    draft = ctl.begin_edit(user_id)
                    draft.balance = await ask_float("💰 New balance", default=draft.balance)
                    if await confirm("Save?", default=True):
                        updated = await busy(ctl.save(), "Saving...")
                        report(ctl, updated is not None, "User updated")
                    else:
                        ctl.cancel_edit()

            elif choice == "4":
                user_id = await pick_id(ctl, "User ID")
                if user_id and await confirm(f"Delete user {user_id}?"):
                    ok = await busy(ctl.delete(user_id))
                    report(ctl, ok, "User deleted")

            elif choice == "5":
                await busy(ctl.load(), "Loading users...")

            elif choice in ("b", "back"):
                return
    finally:
        ctl.store.close()


# ---------------------------
# Categories page
# ---------------------------
async def categories_page(client: AdminClient):
    ctl = CategoriesController(client)
    await busy(ctl.load(), "Loading categories...")
    try:
        while True:
            console.print(show_categories(ctl.store))
            console.print(page_menu("🏷️ Categories", [
                ("1", "➕ Create category"), ("2", "✏️ Rename category"),
                ("3", "🗑️ Delete category"), ("4", "📦 Products in category"),
                ("5", "🔄 Reload"), ("b", "⬅️ Back"),
            ]))
            choice = (await prompt_with_autocomplete("Choose an option")).strip().lower()

            if choice == "1":
                ctl.store.new_draft.name = await prompt_with_autocomplete("Category name")
                created = await busy(ctl.create())
                report(ctl, created is not None, "Category created")

            elif choice == "2":
                category_id = await pick_id(ctl, "Category ID")
                if category_id:
                    draft = ctl.begin_edit(category_id)
                    draft.name = await prompt_with_autocomplete("New name", default=draft.name)
                    updated = await busy(ctl.save(), "Saving...")
                    report(ctl, updated is not None, "Category updated")

            elif choice == "3":
                category_id = await pick_id(ctl, "Category ID")
                if category_id and await confirm(f"Delete category {category_id}?"):
                    ok = await busy(ctl.delete(category_id))
                    report(ctl, ok, "Category deleted")

            elif choice == "4":
                category_id = await pick_id(ctl, "Category ID")
                if category_id:
                    products = await busy(ctl.products_in(category_id))
                    if products is None:
                        report(ctl, False, "")
                    elif not products:
                        console.print("[italic yellow]No products in this category[/italic yellow]")
                    else:
                        for p in products:
                            console.print(f"• [bold]{escape(p.name)}[/bold] ({p.cost:g} points)")

            elif choice == "5":
                await busy(ctl.load(), "Loading categories...")

            elif choice in ("b", "back"):
                return
    finally:
        ctl.store.close()


# ---------------------------
# Products page
# ---------------------------
async def fill_product_form(ctl: ProductsController, form: ProductForm) -> ProductForm:
    categories = ctl.store.categories
    form.name = await prompt_with_autocomplete("Product name", default=form.name)
    form.cost = await ask_float("💰 Cost", default=form.cost)
    emails = await prompt_with_autocomplete("Emails (comma separated)", default=", ".join(form.emails))
    form.emails = parse_emails(emails.replace(",", "\n"))
    form.password = await prompt_with_autocomplete("Password", default=form.password)
    completer = WordCompleter([c.id for c in categories if c.id] + [c.name for c in categories], ignore_case=True)
    picked = (await prompt_with_autocomplete("Category (id or name)", completer=completer,
                                             default=form.category_id)).strip()
    by_name = next((c.id for c in categories if c.name == picked and c.id), None)
    form.category_id = by_name or picked
    return form


async def products_page(client: AdminClient):
    ctl = ProductsController(client)
    await busy(ctl.load(), "Loading products...")
    try:
        while True:
            console.print(show_products(ctl.store))
            console.print(page_menu("📦 Products", [
                ("1", "➕ Create product"), ("2", "✏️ Edit product"),
                ("3", "🗑️ Delete product"), ("4", "📧 Show more/less emails"),
                ("5", "🔄 Reload"), ("b", "⬅️ Back"),
            ]))
            choice = (await prompt_with_autocomplete("Choose an option")).strip().lower()

            if choice == "1":
                await fill_product_form(ctl, ctl.store.new_draft)
                created = await busy(ctl.create())
                report(ctl, created is not None, "Product created")

            elif choice == "2":
                product_id = await pick_id(ctl, "Product ID")
                if product_id:
                    draft = ctl.begin_edit(product_id)
                    await fill_product_form(ctl, draft)
                    updated = await busy(ctl.save(), "Saving...")
                    report(ctl, updated is not None, "Product updated")

            elif choice == "3":
                product_id = await pick_id(ctl, "Product ID")
                if product_id and await confirm(f"Delete product {product_id}?"):
                    ok = await busy(ctl.delete(product_id))
                    report(ctl, ok, "Product deleted")

            elif choice == "4":
                product_id = await pick_id(ctl, "Product ID")
                if product_id:
                    ctl.toggle_emails(product_id)

            elif choice == "5":
                await busy(ctl.load(), "Loading products...")

            elif choice in ("b", "back"):
                return
    finally:
        ctl.store.close()


# ---------------------------
# Main menu
# ---------------------------
async def menu(settings: Settings):
    client = AdminClient(base_url=settings.api_url, timeout=settings.timeout)
    pages = {"1": users_page, "2": products_page, "3": categories_page}

    console.clear()
    console.print(create_header(settings))

    while True:
        console.print(page_menu("📋 Admin Store", [
            ("1", "👤 Manage users"),
            ("2", "📦 Manage products"),
            ("3", "🏷️ Manage categories"),
            ("q", "👋 Quit"),
        ]))
        choice = (await prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "q", "quit", "exit"])
        )).strip().lower()

        if choice in pages:
            await pages[choice](client)

        elif choice in ("q", "quit", "exit"):
            if await confirm("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye 👋[/bold green]", title="Admin Store"))
                return

        console.print()
        console.rule(style="dim")


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level, console=console)
    try:
        asyncio.run(menu(settings))
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        logger.exception("unexpected error")
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
