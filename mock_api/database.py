from typing import Any, Dict

# This file holds the in-memory collections behind the mock API.

USERS: Dict[str, Dict[str, Any]] = {}
PRODUCTS: Dict[str, Dict[str, Any]] = {}
CATEGORIES: Dict[str, Dict[str, Any]] = {}


def reset_all() -> None:
    USERS.clear()
    PRODUCTS.clear()
    CATEGORIES.clear()
