# tests/test_store.py
from admin_console.forms import CategoryForm
from admin_console.models import Category, Product, User, normalize_category
from admin_console.store import CategoriesStore, ProductsStore, UsersStore


def _users():
    return [
        User(id="1", username="Alice", balance=10),
        User(id="2", username="bob", balance=-2),
        User(id="3", username="MALICE", balance=0.5),
    ]


def test_replace_all_clears_error_and_keeps_server_order():
    store = CategoriesStore()
    store.error = "Failed to fetch categories."
    store.replace_all([Category(id="b", name="B"), Category(id="a", name="A")])
    assert store.error is None
    assert [c.id for c in store.items] == ["b", "a"]


def test_append_patch_remove():
    store = CategoriesStore()
    store.replace_all([Category(id="1", name="Toys")])

    store.append(Category(id="2", name="Books"))
    assert [(c.id, c.name) for c in store.items] == [("1", "Toys"), ("2", "Books")]

    store.patch("1", Category(id="1", name="Games"))
    assert store.find("1").name == "Games"
    assert len(store.items) == 2

    store.remove("1")
    assert [c.id for c in store.items] == ["2"]


def test_begin_edit_replaces_previous_draft():
    store = CategoriesStore()
    store.begin_edit("1", CategoryForm(name="half typed"))
    store.begin_edit("2", CategoryForm(name="other"))
    assert store.editing_id == "2"
    assert store.editing_draft.name == "other"
    store.cancel_edit()
    assert store.editing_id is None and store.editing_draft is None


def test_filter_is_case_insensitive_substring():
    store = UsersStore()
    store.replace_all(_users())

    store.search("ALI")
    assert [u.id for u in store.filtered_items] == ["1", "3"]
    assert all("ali" in u.username.lower() for u in store.filtered_items)

    store.search("zzz")
    assert store.filtered_items == []

    store.search("")
    assert store.filtered_items == store.items


def test_filter_follows_item_changes():
    store = UsersStore()
    store.replace_all(_users())
    store.search("ali")

    store.append(User(id="4", username="Alicia"))
    assert [u.id for u in store.filtered_items] == ["1", "3", "4"]

    store.remove("1")
    assert [u.id for u in store.filtered_items] == ["3", "4"]

    store.patch("3", User(id="3", username="carol"))
    assert [u.id for u in store.filtered_items] == ["4"]


def test_toggle_expanded():
    store = ProductsStore()
    assert store.toggle_expanded("p1") is True
    assert store.is_expanded("p1")
    assert store.toggle_expanded("p1") is False
    assert not store.is_expanded("p1")
    assert not store.is_expanded(None)


def test_category_label_by_reference_and_embedded():
    store = ProductsStore()
    store.categories = [Category(id="1", name="Toys")]

    assert store.category_label(Product(id="p1", category_id="1")).name == "Toys"
    assert store.category_label(Product(id="p2", category_id="9")).name == "Uncategorized"
    embedded = Product.model_validate({"_id": "p3", "categoryId": {"_id": "5", "name": "Books"}})
    assert store.category_label(embedded) == ("5", "Books")


def test_normalize_category_without_value():
    assert normalize_category(None) == (None, "Uncategorized")
    assert normalize_category("") == (None, "Uncategorized")


def test_patch_targets_the_given_id():
    store = CategoriesStore()
    store.replace_all([Category(name="no id"), Category(id="1", name="Toys")])

    store.patch("1", Category(name="Games"))

    assert [(c.id, c.name) for c in store.items] == [(None, "no id"), ("1", "Games")]
