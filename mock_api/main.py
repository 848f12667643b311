# mock_api/main.py
import uuid
from typing import Any, Dict

from fastapi import APIRouter, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from .core import (
    CategoryIn, CategoryPatch, ProductIn, ProductPatch, UserIn, UserPatch,
    _make_product_dict
)
from .database import CATEGORIES, PRODUCTS, USERS, reset_all

app = FastAPI(title="adminstore mock API (in-memory)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api = APIRouter(prefix="/api")


def _new_id() -> str:
    return uuid.uuid4().hex


def _get_or_404(collection: Dict[str, Dict[str, Any]], item_id: str, what: str) -> Dict[str, Any]:
    item = collection.get(item_id)
    if not item:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return item


def _populated(product: Dict[str, Any]) -> Dict[str, Any]:
    # reads embed the category, writes echo the raw id
    category = CATEGORIES.get(product.get("categoryId") or "")
    if category is None:
        return product
    return {**product, "categoryId": dict(category)}


# ---------------------------
# Users
# ---------------------------
@api.get("/users")
async def list_users():
    return list(USERS.values())


@api.post("/users", status_code=201)
async def create_user(payload: UserIn):
    uid = _new_id()
    USERS[uid] = {"_id": uid, "username": payload.username, "balance": payload.balance}
    return USERS[uid]


@api.get("/users/{user_id}")
async def get_user(user_id: str):
    return _get_or_404(USERS, user_id, "user")


@api.put("/users/{user_id}")
async def update_user(user_id: str, payload: UserPatch):
    user = _get_or_404(USERS, user_id, "user")
    user.update(payload.model_dump(exclude_unset=True))
    return user


@api.delete("/users/{user_id}", status_code=204)
async def delete_user(user_id: str):
    _get_or_404(USERS, user_id, "user")
    del USERS[user_id]
    return Response(status_code=204)


# ---------------------------
# Products
# ---------------------------
@api.get("/products")
async def list_products():
    return [_populated(p) for p in PRODUCTS.values()]


@api.post("/products", status_code=201)
async def create_product(payload: ProductIn):
    pid = _new_id()
    PRODUCTS[pid] = _make_product_dict(pid, payload)
    return PRODUCTS[pid]


@api.get("/products/{product_id}")
async def get_product(product_id: str):
    return _populated(_get_or_404(PRODUCTS, product_id, "product"))


@api.put("/products/{product_id}")
async def update_product(product_id: str, payload: ProductPatch):
    product = _get_or_404(PRODUCTS, product_id, "product")
    product.update(payload.model_dump(exclude_unset=True, by_alias=True))
    return product


@api.delete("/products/{product_id}", status_code=204)
async def delete_product(product_id: str):
    _get_or_404(PRODUCTS, product_id, "product")
    del PRODUCTS[product_id]
    return Response(status_code=204)


# ---------------------------
# Categories
# ---------------------------
@api.get("/categories")
async def list_categories():
    return list(CATEGORIES.values())


@api.post("/categories", status_code=201)
async def create_category(payload: CategoryIn):
    cid = _new_id()
    CATEGORIES[cid] = {"_id": cid, "name": payload.name}
    return CATEGORIES[cid]


@api.get("/categories/{category_id}")
async def get_category(category_id: str):
    return _get_or_404(CATEGORIES, category_id, "category")


@api.put("/categories/{category_id}")
async def update_category(category_id: str, payload: CategoryPatch):
    category = _get_or_404(CATEGORIES, category_id, "category")
    category.update(payload.model_dump(exclude_unset=True))
    return category


@api.delete("/categories/{category_id}", status_code=204)
async def delete_category(category_id: str):
    _get_or_404(CATEGORIES, category_id, "category")
    # products keep their now dangling categoryId
    del CATEGORIES[category_id]
    return Response(status_code=204)


@api.get("/categories/{category_id}/products")
async def list_category_products(category_id: str):
    _get_or_404(CATEGORIES, category_id, "category")
    return [p for p in PRODUCTS.values() if p.get("categoryId") == category_id]


@api.post("/categories/{category_id}/products", status_code=201)
async def add_product_to_category(category_id: str, payload: ProductIn):
    _get_or_404(CATEGORIES, category_id, "category")
    pid = _new_id()
    PRODUCTS[pid] = _make_product_dict(pid, payload, category_id=category_id)
    return PRODUCTS[pid]


# Utility: reset (for tests/demo)
@api.post("/reset")
async def reset():
    reset_all()
    return {"status": "reset"}


app.include_router(api)
