from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Request bodies accepted by the mock API, in wire names.


class UserIn(BaseModel):
    username: str
    balance: float = 0


class UserPatch(BaseModel):
    username: Optional[str] = None
    balance: Optional[float] = None


class CategoryIn(BaseModel):
    name: str


class CategoryPatch(BaseModel):
    name: Optional[str] = None


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    cost: float
    emails: List[str] = Field(default_factory=list)
    password: str
    category_id: Optional[str] = Field(default=None, alias="categoryId")


class ProductPatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    cost: Optional[float] = None
    emails: Optional[List[str]] = None
    password: Optional[str] = None
    category_id: Optional[str] = Field(default=None, alias="categoryId")


def _make_product_dict(product_id: str, p: ProductIn, category_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "_id": product_id,
        "name": p.name,
        "cost": p.cost,
        "emails": list(p.emails),
        "password": p.password,
        "categoryId": category_id if category_id is not None else p.category_id,
    }
