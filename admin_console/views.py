# admin_console/views.py
from typing import Any, List, Optional, Tuple

from rich import box
from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .store import CategoriesStore, ProductsStore, UsersStore

EMAIL_PREVIEW = 3


def row_key(item: Any, index: int) -> str:
    """Display key for a row. The positional fallback is never an identity."""
    return getattr(item, "id", None) or f"#{index}"


def email_preview(emails: List[str], expanded: bool, limit: int = EMAIL_PREVIEW) -> Tuple[List[str], int]:
    """Return the emails to show and how many are hidden."""
    emails = list(emails or [])
    if expanded or len(emails) <= limit:
        return emails, 0
    return emails[:limit], len(emails) - limit


def format_points(value: float) -> str:
    return f"{value:g} points"


def show_status(message: str, is_success: bool = True) -> Panel:
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{escape(message)}[/{style}]", title="Status")


def _page(body: Any, error: Optional[str]) -> Group:
    if error:
        return Group(Text(error, style="bold red"), body)
    return Group(body)


def _empty(what: str) -> Text:
    return Text(f"No {what} found.", style="italic yellow")


def show_users(store: UsersStore) -> Group:
    if store.loading:
        return Group(Text("Loading users...", style="italic"))

    table = Table(
        title="👤 Users Management",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True,
    )
    table.add_column("ID", style="dim", width=26)
    table.add_column("Username", style="bold", width=20)
    table.add_column("Balance", justify="right", width=16)

    for i, user in enumerate(store.filtered_items):
        balance = format_points(user.balance)
        if user.id and user.id == store.editing_id:
            draft = store.editing_draft
            balance = f"[yellow]✎ {format_points(draft.balance)}[/yellow]"
            if store.saving:
                balance += " [dim]Saving...[/dim]"
        table.add_row(escape(row_key(user, i)), escape(user.username), balance)

    if not store.filtered_items:
        return _page(_empty("users"), store.error)
    return _page(table, store.error)


def show_categories(store: CategoriesStore) -> Group:
    if store.loading:
        return Group(Text("Loading categories...", style="italic"))

    table = Table(
        title="🏷️ Categories Management",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True,
    )
    table.add_column("ID", style="dim", width=26)
    table.add_column("Name", style="bold", width=30)

    for i, category in enumerate(store.items):
        name = escape(category.name)
        if category.id and category.id == store.editing_id:
            name = f"[yellow]✎ {escape(store.editing_draft.name)}[/yellow]"
        table.add_row(escape(row_key(category, i)), name)

    if not store.items:
        return _page(_empty("categories"), store.error)
    return _page(table, store.error)


def show_products(store: ProductsStore) -> Group:
    if store.loading and store.items:
        return Group(Text("Loading products...", style="italic"))

    table = Table(
        title="📦 Products Management",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True,
    )
    table.add_column("ID", style="dim", width=26)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Cost", justify="right", width=12)
    table.add_column("Emails", width=36)
    table.add_column("Password", width=14)
    table.add_column("Category", width=16)

    for i, product in enumerate(store.items):
        shown, hidden = email_preview(product.emails, store.is_expanded(product.id))
        emails = "\n".join(escape(e) for e in shown) if shown else "[dim]No emails[/dim]"
        if hidden:
            emails += f"\n[dim]+{hidden} more[/dim]"
        name = escape(product.name)
        if product.id and product.id == store.editing_id:
            name = f"[yellow]✎ {name}[/yellow]"
        table.add_row(
            escape(row_key(product, i)),
            name,
            format_points(product.cost),
            emails,
            escape(product.password),
            escape(store.category_label(product).name),
        )

    if not store.items:
        return _page(_empty("products"), store.error)
    return _page(table, store.error)
