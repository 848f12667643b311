#!/usr/bin/env python
import asyncio

from adminsdk import AdminClient
from admin_console.config import Settings
from admin_console.controllers import CategoriesController, ProductsController, UsersController
from admin_console.forms import CategoryForm, ProductForm, UserForm


async def main():
    settings = Settings.from_env()
    c = AdminClient(base_url=settings.api_url, timeout=settings.timeout)

    # -----------------------------
    # Categories
    # -----------------------------
    print("Creating categories...")
    categories = CategoriesController(c)
    await categories.load()
    toys = await categories.create(CategoryForm(name="Toys"))
    books = await categories.create(CategoryForm(name="Books"))
    print([cat.name for cat in categories.store.items])

    categories.begin_edit(books.id)
    categories.store.editing_draft.name = "Used Books"
    await categories.save()
    print("Renamed:", categories.store.find(books.id))

    # -----------------------------
    # Products
    # -----------------------------
    print("\nCreating products...")
    products = ProductsController(c)
    await products.load()
    robot = await products.create(ProductForm(
        name="Robot", cost=25, password="s3cret", category_id=toys.id,
        emails=["a@example.com", "b@example.com", "c@example.com", "d@example.com", "e@example.com"],
    ))
    await products.create(ProductForm(name="Broken", cost=0, password="x", category_id=toys.id))
    print("Rejected locally:", products.store.error)
    for p in products.store.items:
        print(p.name, "->", products.store.category_label(p).name)

    print("\nProducts in Toys:", await categories.products_in(toys.id))

    # -----------------------------
    # Users
    # -----------------------------
    print("\nUsers...")
    users = UsersController(c)
    await users.load()
    alice = await users.create(UserForm(username="alice", balance=100))
    await users.create(UserForm(username="bob", balance=-5.5))
    users.search("AL")
    print("Search 'AL':", [u.username for u in users.store.filtered_items])

    users.begin_edit(alice.id)
    users.store.editing_draft.balance = 42
    await users.save()
    print("Alice:", users.store.find(alice.id))

    # -----------------------------
    # Cleanup
    # -----------------------------
    print("\nDeleting...")
    await products.delete(robot.id)
    await users.delete(alice.id)
    print("Products left:", len(products.store.items), "Users left:", len(users.store.items))

    for ctl in (categories, products, users):
        ctl.store.close()


if __name__ == "__main__":
    asyncio.run(main())
