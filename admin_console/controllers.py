# admin_console/controllers.py
import asyncio
import enum
import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from .errors import GatewayError, ValidationError
from .forms import CategoryForm, ProductForm, UserForm
from .models import Entity, Product
from .store import CategoriesStore, PageStore, ProductsStore, UsersStore

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class Reconcile(enum.Enum):
    """What the store does once an update has been confirmed by the server."""

    # replace the row with the server echo
    PATCH = "patch"
    # replace the row with the server echo, then reload the whole page
    REFETCH = "refetch"


class CrudController(Generic[E]):
    """
    Runs one gateway call per user action and reconciles the page store.

    The store is only touched after the server confirmed the call, so a failed
    operation leaves items as they were. Validation happens before any
    request goes out. Responses that arrive after the page was closed are
    dropped.
    """

    entity_name = "item"
    plural_name = "items"
    form_class: type = BaseModel
    reconcile = Reconcile.PATCH

    def __init__(self, gateway, store: Optional[PageStore[E]] = None):
        self.gateway = gateway
        self.store = store if store is not None else self.make_store()
        if self.store.new_draft is None:
            self.store.new_draft = self.form_class()

    def make_store(self) -> PageStore[E]:
        return PageStore()

    # Gateway bindings
    async def _fetch(self) -> List[E]:
        raise NotImplementedError

    async def _create(self, fields: Dict[str, Any]) -> E:
        raise NotImplementedError

    async def _update(self, item_id: str, fields: Dict[str, Any]) -> E:
        raise NotImplementedError

    async def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    def _draft_for(self, item: E) -> BaseModel:
        return self.form_class.from_entity(item)

    def _fields(self, form: BaseModel) -> Dict[str, Any]:
        return form.validated()

    def _discarded(self, action: str) -> bool:
        if self.store.closed:
            logger.debug("page closed, ignoring %s %s response", action, self.entity_name)
            return True
        return False

    def _failed(self, action: str, exc: Exception) -> None:
        logger.error("Error %s %s: %s", action, self.entity_name, exc)

    # Operations
    async def load(self) -> bool:
        store = self.store
        store.loading = True
        store.error = None
        try:
            items = await self._fetch()
        except GatewayError as e:
            if self._discarded("fetch"):
                return False
            store.error = f"Failed to fetch {self.plural_name}."
            self._failed("fetching", e)
            return False
        finally:
            store.loading = False
        if self._discarded("fetch"):
            return False
        store.replace_all(items)
        return True

    async def create(self, form: Optional[BaseModel] = None) -> Optional[E]:
        store = self.store
        if store.submitting:
            return None
        form = form if form is not None else store.new_draft
        try:
            fields = self._fields(form)
        except ValidationError as e:
            store.error = str(e)
            return None
        store.error = None
        store.submitting = True
        try:
            created = await self._create(fields)
        except GatewayError as e:
            if not self._discarded("create"):
                store.error = f"Failed to create {self.entity_name}."
                self._failed("creating", e)
            return None
        finally:
            store.submitting = False
        if self._discarded("create"):
            return None
        store.append(created)
        store.new_draft = self.form_class()
        return created

    def begin_edit(self, item_id: str) -> BaseModel:
        item = self.store.find(item_id)
        if item is None:
            raise ValueError(f"no {self.entity_name} with id {item_id!r}")
        draft = self._draft_for(item)
        self.store.begin_edit(item_id, draft)
        return draft

    def cancel_edit(self) -> None:
        self.store.cancel_edit()
        self.store.error = None

    async def save(self) -> Optional[E]:
        store = self.store
        if store.saving:
            return None
        item_id = store.editing_id
        if not item_id:
            raise ValueError(f"no {self.entity_name} is being edited")
        try:
            fields = self._fields(store.editing_draft)
        except ValidationError as e:
            store.error = str(e)
            return None
        store.error = None
        store.saving = True
        try:
            updated = await self._update(item_id, fields)
        except GatewayError as e:
            if not self._discarded("update"):
                store.error = f"Failed to update {self.entity_name}."
                self._failed("updating", e)
            return None
        finally:
            store.saving = False
        if self._discarded("update"):
            return None
        store.patch(item_id, updated)
        if store.editing_id == item_id:
            store.cancel_edit()
        if self.reconcile is Reconcile.REFETCH:
            await self.load()
        return updated

    async def delete(self, item_id: str) -> bool:
        if not item_id:
            raise ValueError(f"cannot delete a {self.entity_name} without an id")
        store = self.store
        store.error = None
        try:
            await self._delete(item_id)
        except GatewayError as e:
            if not self._discarded("delete"):
                store.error = f"Failed to delete {self.entity_name}."
                self._failed("deleting", e)
            return False
        if self._discarded("delete"):
            return False
        store.remove(item_id)
        if store.editing_id == item_id:
            store.cancel_edit()
        return True


class UsersController(CrudController):
    entity_name = "user"
    plural_name = "users"
    form_class = UserForm
    reconcile = Reconcile.PATCH

    def make_store(self) -> UsersStore:
        return UsersStore()

    def search(self, query: str) -> None:
        self.store.search(query)

    async def _fetch(self):
        return await self.gateway.list_users()

    async def _create(self, fields):
        return await self.gateway.create_user(fields)

    async def _update(self, item_id, fields):
        return await self.gateway.update_user(item_id, fields)

    async def _delete(self, item_id):
        await self.gateway.delete_user(item_id)


class CategoriesController(CrudController):
    entity_name = "category"
    plural_name = "categories"
    form_class = CategoryForm
    reconcile = Reconcile.PATCH

    def make_store(self) -> CategoriesStore:
        return CategoriesStore()

    async def _fetch(self):
        return await self.gateway.list_categories()

    async def _create(self, fields):
        return await self.gateway.create_category(fields)

    async def _update(self, item_id, fields):
        return await self.gateway.update_category(item_id, fields)

    async def _delete(self, item_id):
        await self.gateway.delete_category(item_id)

    async def products_in(self, category_id: str) -> Optional[List[Product]]:
        """Products filed under one category; not cached in the store."""
        self.store.error = None
        try:
            products = await self.gateway.list_category_products(category_id)
        except GatewayError as e:
            if not self._discarded("fetch products of"):
                self.store.error = "Failed to fetch products for category."
                self._failed("fetching products of", e)
            return None
        if self._discarded("fetch products of"):
            return None
        return products

    async def add_product(self, category_id: str, form: ProductForm) -> Optional[Product]:
        try:
            fields = form.validated(with_category=False)
        except ValidationError as e:
            self.store.error = str(e)
            return None
        self.store.error = None
        try:
            product = await self.gateway.add_product_to_category(category_id, fields)
        except GatewayError as e:
            if not self._discarded("add product to"):
                self.store.error = "Failed to add product to category."
                self._failed("adding product to", e)
            return None
        return product


class ProductsController(CrudController):
    entity_name = "product"
    plural_name = "products"
    form_class = ProductForm
    # product rows carry a category join that a single echo may not resolve
    reconcile = Reconcile.REFETCH

    def make_store(self) -> ProductsStore:
        return ProductsStore()

    async def load(self) -> bool:
        store = self.store
        store.loading = True
        store.error = None
        try:
            products, categories = await asyncio.gather(
                self.gateway.list_products(),
                self.gateway.list_categories(),
            )
        except GatewayError as e:
            if self._discarded("fetch"):
                return False
            store.error = "Failed to fetch data. Please try again later."
            self._failed("fetching", e)
            return False
        finally:
            store.loading = False
        if self._discarded("fetch"):
            return False
        store.categories = list(categories)
        store.replace_all(products)
        return True

    def toggle_emails(self, product_id: str) -> bool:
        return self.store.toggle_expanded(product_id)

    async def _create(self, fields):
        return await self.gateway.create_product(fields)

    async def _update(self, item_id, fields):
        return await self.gateway.update_product(item_id, fields)

    async def _delete(self, item_id):
        await self.gateway.delete_product(item_id)
