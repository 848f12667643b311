# admin_console/store.py
from typing import Generic, Iterable, List, Optional, Set, TypeVar

from pydantic import BaseModel

from .models import Category, CategoryLabel, Entity, Product, User, normalize_category

# This file holds the per-page state. A store lives as long as its page and
# is closed when the user navigates away.

E = TypeVar("E", bound=Entity)


class PageStore(Generic[E]):
    def __init__(self, new_draft: Optional[BaseModel] = None):
        self.items: List[E] = []
        self.loading = False
        self.saving = False
        self.submitting = False
        self.error: Optional[str] = None
        self.editing_id: Optional[str] = None
        self.editing_draft: Optional[BaseModel] = None
        self.new_draft = new_draft
        self.closed = False

    def find(self, item_id: str) -> Optional[E]:
        if not item_id:
            return None
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # Reconciliation
    def replace_all(self, items: Iterable[E]) -> None:
        self.items = list(items)
        self.error = None
        self._items_changed()

    def append(self, item: E) -> None:
        self.items = self.items + [item]
        self._items_changed()

    def remove(self, item_id: str) -> None:
        self.items = [i for i in self.items if i.id != item_id]
        self._items_changed()

    def patch(self, item_id: str, item: E) -> None:
        # match on the id that was updated, never on the echo's own id
        if not item_id:
            return
        if item.id is None:
            item = item.model_copy(update={"id": item_id})
        self.items = [item if i.id == item_id else i for i in self.items]
        self._items_changed()

    def _items_changed(self) -> None:
        pass

    # Edit state
    def begin_edit(self, item_id: str, draft: BaseModel) -> None:
        # an unsaved draft on another row is dropped without warning
        self.editing_id = item_id
        self.editing_draft = draft

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.editing_draft = None

    def close(self) -> None:
        self.closed = True


class UsersStore(PageStore[User]):
    def __init__(self, new_draft: Optional[BaseModel] = None):
        super().__init__(new_draft)
        self.query = ""
        self.filtered_items: List[User] = []

    def search(self, query: str) -> None:
        self.query = query or ""
        self._items_changed()

    def _items_changed(self) -> None:
        term = self.query.lower()
        self.filtered_items = [u for u in self.items if term in (u.username or "").lower()]


class CategoriesStore(PageStore[Category]):
    pass


class ProductsStore(PageStore[Product]):
    def __init__(self, new_draft: Optional[BaseModel] = None):
        super().__init__(new_draft)
        self.categories: List[Category] = []
        self.expanded_detail_ids: Set[str] = set()

    def toggle_expanded(self, product_id: str) -> bool:
        if product_id in self.expanded_detail_ids:
            self.expanded_detail_ids.discard(product_id)
            return False
        self.expanded_detail_ids.add(product_id)
        return True

    def is_expanded(self, product_id: Optional[str]) -> bool:
        return bool(product_id) and product_id in self.expanded_detail_ids

    def category_label(self, product: Product) -> CategoryLabel:
        return normalize_category(product.category_id, self.categories)

    def remove(self, item_id: str) -> None:
        super().remove(item_id)
        self.expanded_detail_ids.discard(item_id)
