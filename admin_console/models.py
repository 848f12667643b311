# admin_console/models.py
from typing import Iterable, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

UNCATEGORIZED = "Uncategorized"


class Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Optional on read: the server sometimes sends rows without an id
    id: Optional[str] = Field(default=None, alias="_id")


class User(Entity):
    username: str = ""
    balance: float = 0


class Category(Entity):
    name: str = ""


class Product(Entity):
    name: str = ""
    cost: float = 0
    emails: List[str] = Field(default_factory=list)
    password: str = ""
    # Raw id from create/update echoes, embedded Category from populated reads
    category_id: Union[Category, str, None] = Field(default=None, alias="categoryId")


class CategoryLabel(NamedTuple):
    id: Optional[str]
    name: str


def normalize_category(value: Union[Category, str, None],
                       categories: Iterable[Category] = ()) -> CategoryLabel:
    """
    Collapse a product's category field into an (id, name) pair.

    An embedded Category is used as-is. A bare id is looked up in the
    fetched categories and falls back to "Uncategorized" when nothing matches.
    """
    if isinstance(value, Category):
        return CategoryLabel(value.id, value.name or UNCATEGORIZED)
    if not value:
        return CategoryLabel(None, UNCATEGORIZED)
    for category in categories:
        if category.id == value:
            return CategoryLabel(value, category.name)
    return CategoryLabel(value, UNCATEGORIZED)
