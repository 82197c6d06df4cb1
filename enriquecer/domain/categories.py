"""Category catalogs and category management"""

import uuid
from typing import Callable, List, Optional, Sequence

from enriquecer.domain.exceptions import CategoryNotFoundError, InvalidCategoryError
from enriquecer.domain.models import Category

DEFAULT_EXPENSE_CATEGORY = "Essenciais"
DEFAULT_INCOME_CATEGORY = "Outras"

EXPENSE_CATEGORIES: List[Category] = [
    Category(id=name.lower(), name=name) for name in ("Essenciais", "Supérfluos", "Objetivos")
]
# Income categories are fixed; only the expense catalog is user-managed.
INCOME_CATEGORIES: List[Category] = [
    Category(id=name.lower(), name=name) for name in ("Salário", "Outras")
]


def new_id() -> str:
    return uuid.uuid4().hex


def default_expense_categories() -> List[Category]:
    return list(EXPENSE_CATEGORIES)


def find_category(categories: Sequence[Category], category_id: Optional[str]) -> Optional[Category]:
    """Category with the given id, or None"""
    if not category_id:
        return None
    return next((c for c in categories if c.id == category_id), None)


def resolve_category_name(
    categories: Sequence[Category],
    category_id: Optional[str],
    fallback: str,
) -> str:
    """
    Name snapshot stored on a new transaction.

    Unknown ids resolve to `fallback` rather than failing, so a category
    deleted while a form was open still yields a usable record.
    """
    category = find_category(categories, category_id)
    return category.name if category else fallback


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidCategoryError("Category name must not be empty")
    return cleaned


def add_category(
    categories: Sequence[Category],
    name: str,
    id_factory: Callable[[], str] = new_id,
) -> List[Category]:
    """Append a new category with a fresh id"""
    return [*categories, Category(id=id_factory(), name=_clean_name(name))]


def rename_category(categories: Sequence[Category], category_id: str, name: str) -> List[Category]:
    """
    Change a category's name.

    Already recorded transactions keep the old name: they hold a snapshot.

    Raises:
        CategoryNotFoundError: If no category has `category_id`
        InvalidCategoryError: If the new name is blank
    """
    cleaned = _clean_name(name)
    if find_category(categories, category_id) is None:
        raise CategoryNotFoundError(f"Category {category_id} not found")

    return [Category(id=c.id, name=cleaned) if c.id == category_id else c for c in categories]


def delete_category(categories: Sequence[Category], category_id: str) -> List[Category]:
    """Drop a category; unknown ids are a no-op"""
    return [c for c in categories if c.id != category_id]
