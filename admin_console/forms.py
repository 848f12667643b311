# admin_console/forms.py
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import ValidationError
from .models import Category, Product, User, normalize_category

REQUIRED_FIELDS_MSG = "Please fill in all required fields."


class UserForm(BaseModel):
    username: str = ""
    balance: float = 0

    @classmethod
    def from_entity(cls, user: User) -> "UserForm":
        return cls(username=user.username or "", balance=user.balance or 0)

    def validated(self) -> Dict[str, Any]:
        username = self.username.strip()
        if not username:
            raise ValidationError("Username cannot be empty.")
        # balance is a ledger value: negative and fractional amounts are allowed
        if not math.isfinite(self.balance):
            raise ValidationError("Balance must be a finite number.")
        return {"username": username, "balance": self.balance}


class CategoryForm(BaseModel):
    name: str = ""

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryForm":
        return cls(name=category.name or "")

    def validated(self) -> Dict[str, Any]:
        name = self.name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty.")
        return {"name": name}


class ProductForm(BaseModel):
    name: str = ""
    cost: float = 0
    emails: List[str] = Field(default_factory=list)
    password: str = ""
    category_id: str = ""

    @classmethod
    def from_entity(cls, product: Product) -> "ProductForm":
        return cls(
            name=product.name or "",
            cost=product.cost or 0,
            emails=[e for e in product.emails if e],
            password=product.password or "",
            category_id=normalize_category(product.category_id).id or "",
        )

    def validated(self, with_category: bool = True) -> Dict[str, Any]:
        name = self.name.strip()
        password = self.password.strip()
        category_id = self.category_id.strip()
        if not name or not password or (with_category and not category_id):
            raise ValidationError(REQUIRED_FIELDS_MSG)
        if not math.isfinite(self.cost) or not self.cost > 0:
            raise ValidationError("Cost must be greater than zero.")
        fields = {
            "name": name,
            "cost": self.cost,
            "emails": parse_emails(self.emails),
            "password": password,
        }
        if with_category:
            fields["categoryId"] = category_id
        return fields


def parse_emails(raw: Optional[Any]) -> List[str]:
    """Accept newline separated text or a list; trim and drop blank lines."""
    if raw is None:
        return []
    lines = raw.split("\n") if isinstance(raw, str) else list(raw)
    return [e.strip() for e in lines if e and e.strip()]
