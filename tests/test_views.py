# tests/test_views.py
from rich.console import Console

from admin_console.models import Category, Product, User
from admin_console.store import CategoriesStore, ProductsStore, UsersStore
from admin_console.views import email_preview, row_key, show_categories, show_products, show_users

EMAILS = ["a@x.io", "b@x.io", "c@x.io", "d@x.io", "e@x.io"]


def render(renderable) -> str:
    console = Console(record=True, width=200)
    console.print(renderable)
    return console.export_text()


def test_email_preview_collapses_and_expands():
    assert email_preview(EMAILS, expanded=False) == (EMAILS[:3], 2)
    assert email_preview(EMAILS, expanded=True) == (EMAILS, 0)
    assert email_preview(EMAILS[:3], expanded=False) == (EMAILS[:3], 0)
    assert email_preview([], expanded=False) == ([], 0)


def test_product_emails_follow_toggle():
    store = ProductsStore()
    store.replace_all([Product(id="p1", name="Robot", cost=2, emails=EMAILS, password="pw")])

    text = render(show_products(store))
    assert "c@x.io" in text and "e@x.io" not in text
    assert "+2 more" in text

    store.toggle_expanded("p1")
    text = render(show_products(store))
    assert "e@x.io" in text and "+2 more" not in text

    store.toggle_expanded("p1")
    assert "e@x.io" not in render(show_products(store))


def test_product_category_names():
    store = ProductsStore()
    store.categories = [Category(id="1", name="Toys")]
    store.replace_all([
        Product(id="p1", name="Robot", cost=1, password="pw", category_id="1"),
        Product(id="p2", name="Kite", cost=1, password="pw", category_id="404"),
    ])
    text = render(show_products(store))
    assert "Toys" in text
    assert "Uncategorized" in text


def test_rows_without_id_use_position_for_display():
    assert row_key(Category(id="abc", name="A"), 0) == "abc"
    assert row_key(Category(name="B"), 3) == "#3"

    store = CategoriesStore()
    store.replace_all([Category(id="abc", name="A"), Category(name="B")])
    text = render(show_categories(store))
    assert "#1" in text
    # the display key never becomes an identity
    assert store.find("#1") is None


def test_users_render_filtered_view_and_error():
    store = UsersStore()
    store.replace_all([User(id="1", username="alice", balance=-3), User(id="2", username="bob")])
    store.search("bo")
    store.error = "Failed to delete user."

    text = render(show_users(store))
    assert "bob" in text and "alice" not in text
    assert "Failed to delete user." in text

    store.search("nobody")
    assert "No users found." in render(show_users(store))


def test_bracketed_server_strings_render_literally():
    users = UsersStore()
    users.replace_all([User(id="1", username="eve[/b]", balance=1)])
    assert "eve[/b]" in render(show_users(users))

    categories = CategoriesStore()
    categories.replace_all([Category(id="c1", name="[bold]Toys")])
    assert "[bold]Toys" in render(show_categories(categories))

    products = ProductsStore()
    products.categories = [Category(id="c1", name="[red]Toys[/x]")]
    products.replace_all([Product(id="p1", name="Robot[/i]", cost=1, password="[pw]", category_id="c1")])
    text = render(show_products(products))
    assert "Robot[/i]" in text
    assert "[pw]" in text
    assert "[red]Toys[/x]" in text
