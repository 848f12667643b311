# adminsdk/adminstore.py
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from admin_console.errors import NetworkError, ServerError
from admin_console.models import Category, Entity, Product, User

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class AdminClient:
    """
    Async client for the store admin REST API.

    Every call is a single request on a fresh httpx.AsyncClient: no retry,
    no caching, no idempotency key. Failures come back as NetworkError or
    ServerError with the httpx exception chained.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8085/api",
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None,
                       model: Optional[Type[E]] = None, many: bool = False) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                r = await client.request(method, url, json=json)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning("%s %s failed with %s: %s", method, url, e.response.status_code, detail)
            raise ServerError(e.response.status_code, detail) from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %r", method, url, e)
            raise NetworkError(f"{method} {url}: {e}") from e
        if model is None:
            return None
        try:
            data = r.json()
            if many:
                return [model.model_validate(row) for row in data or []]
            return model.model_validate(data)
        except (ValueError, TypeError, PydanticValidationError) as e:
            # a 2xx that does not decode into records is still a failed call
            logger.warning("%s %s returned an unreadable body: %s", method, url, e)
            raise ServerError(r.status_code, "invalid response body") from e

    async def _list(self, path: str, model: Type[E]) -> List[E]:
        return await self._request("GET", path, model=model, many=True)

    async def _one(self, method: str, path: str, model: Type[E],
                   json: Optional[Dict[str, Any]] = None) -> E:
        return await self._request(method, path, json=json, model=model)

    # Users
    async def list_users(self) -> List[User]:
        return await self._list("/users", User)

    async def get_user(self, user_id: str) -> User:
        return await self._one("GET", f"/users/{user_id}", User)

    async def create_user(self, fields: Dict[str, Any]) -> User:
        return await self._one("POST", "/users", User, json=fields)

    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> User:
        return await self._one("PUT", f"/users/{user_id}", User, json=fields)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/users/{user_id}")

    # Products
    async def list_products(self) -> List[Product]:
        return await self._list("/products", Product)

    async def get_product(self, product_id: str) -> Product:
        return await self._one("GET", f"/products/{product_id}", Product)

    async def create_product(self, fields: Dict[str, Any]) -> Product:
        return await self._one("POST", "/products", Product, json=fields)

    async def update_product(self, product_id: str, fields: Dict[str, Any]) -> Product:
        return await self._one("PUT", f"/products/{product_id}", Product, json=fields)

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}")

    # Categories
    async def list_categories(self) -> List[Category]:
        return await self._list("/categories", Category)

    async def get_category(self, category_id: str) -> Category:
        return await self._one("GET", f"/categories/{category_id}", Category)

    async def create_category(self, fields: Dict[str, Any]) -> Category:
        return await self._one("POST", "/categories", Category, json=fields)

    async def update_category(self, category_id: str, fields: Dict[str, Any]) -> Category:
        return await self._one("PUT", f"/categories/{category_id}", Category, json=fields)

    async def delete_category(self, category_id: str) -> None:
        await self._request("DELETE", f"/categories/{category_id}")

    # Category -> products
    async def list_category_products(self, category_id: str) -> List[Product]:
        return await self._list(f"/categories/{category_id}/products", Product)

    async def add_product_to_category(self, category_id: str, fields: Dict[str, Any]) -> Product:
        return await self._one("POST", f"/categories/{category_id}/products", Product, json=fields)


def _error_detail(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body
