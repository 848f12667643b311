# tests/test_gateway.py
import asyncio

import httpx
import pytest

from adminsdk import AdminClient
from admin_console.controllers import UsersController
from admin_console.errors import NetworkError, ServerError
from admin_console.models import Category


def test_user_crud_round_trip(client):
    async def run():
        created = await client.create_user({"username": "alice", "balance": 10})
        assert created.id
        assert created.username == "alice"

        listed = await client.list_users()
        assert [u.id for u in listed] == [created.id]

        updated = await client.update_user(created.id, {"balance": -3.5})
        assert updated.balance == -3.5
        # the full record is echoed, not only the patch
        assert updated.username == "alice"

        fetched = await client.get_user(created.id)
        assert fetched == updated

        assert await client.delete_user(created.id) is None
        assert await client.list_users() == []

    asyncio.run(run())


def test_products_read_embeds_category_and_write_echoes_id(client):
    async def run():
        toys = await client.create_category({"name": "Toys"})
        product = await client.create_product({
            "name": "Robot", "cost": 5, "emails": [], "password": "pw", "categoryId": toys.id,
        })
        assert product.category_id == toys.id

        [listed] = await client.list_products()
        assert isinstance(listed.category_id, Category)
        assert listed.category_id.name == "Toys"

        single = await client.get_product(product.id)
        assert isinstance(single.category_id, Category)

    asyncio.run(run())


def test_category_products_endpoints(client):
    async def run():
        toys = await client.create_category({"name": "Toys"})
        books = await client.create_category({"name": "Books"})
        added = await client.add_product_to_category(toys.id, {
            "name": "Kite", "cost": 3, "emails": ["x@example.com"], "password": "pw",
        })
        assert added.category_id == toys.id

        assert [p.id for p in await client.list_category_products(toys.id)] == [added.id]
        assert await client.list_category_products(books.id) == []

    asyncio.run(run())


def test_missing_id_raises_server_error(client):
    with pytest.raises(ServerError) as exc:
        asyncio.run(client.delete_category("nope"))
    assert exc.value.status_code == 404
    assert exc.value.detail == "category not found"
    assert isinstance(exc.value.__cause__, httpx.HTTPStatusError)


def test_transport_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = AdminClient(base_url="http://test/api", transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError):
        asyncio.run(gateway.list_users())


def test_requests_use_api_base_path_and_json():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path, request.content, request.headers))
        return httpx.Response(200, json={"_id": "7", "name": "Books"})

    gateway = AdminClient(base_url="http://test/api/", transport=httpx.MockTransport(handler))
    category = asyncio.run(gateway.update_category("7", {"name": "Books"}))

    assert category.id == "7"
    assert seen[0][0] == "PUT"
    assert seen[0][1] == "/api/categories/7"
    assert b'"name"' in seen[0][2]
    assert "authorization" not in seen[0][3]


@pytest.mark.parametrize("body", [
    b"<html>maintenance</html>",
    b'[{"_id": "1", "username": null, "balance": 1}]',
    b"42",
])
def test_unreadable_success_body_raises_server_error(body):
    def handler(request):
        return httpx.Response(200, content=body)

    gateway = AdminClient(base_url="http://test/api", transport=httpx.MockTransport(handler))
    with pytest.raises(ServerError) as exc:
        asyncio.run(gateway.list_users())
    assert exc.value.status_code == 200
    assert exc.value.__cause__ is not None


def test_unreadable_body_becomes_fetch_error_message():
    def handler(request):
        return httpx.Response(200, json=[{"_id": "1", "username": None, "balance": 1}])

    ctl = UsersController(AdminClient(base_url="http://test/api", transport=httpx.MockTransport(handler)))

    assert asyncio.run(ctl.load()) is False
    assert ctl.store.error == "Failed to fetch users."
    assert ctl.store.items == []
