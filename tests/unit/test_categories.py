"""Unit tests for category management"""

import pytest
from enriquecer.domain.categories import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    add_category,
    delete_category,
    find_category,
    rename_category,
    resolve_category_name,
)
from enriquecer.domain.exceptions import CategoryNotFoundError, InvalidCategoryError
from enriquecer.domain.models import Category


def test_default_catalogs():
    """Test default catalogs use lower-cased names as ids"""
    assert [(c.id, c.name) for c in EXPENSE_CATEGORIES] == [
        ("essenciais", "Essenciais"),
        ("supérfluos", "Supérfluos"),
        ("objetivos", "Objetivos"),
    ]
    assert [c.name for c in INCOME_CATEGORIES] == ["Salário", "Outras"]


def test_add_category_appends_with_fresh_id():
    categories = add_category(EXPENSE_CATEGORIES, "  Saúde ", id_factory=lambda: "new")

    assert categories[-1] == Category(id="new", name="Saúde")
    assert len(categories) == len(EXPENSE_CATEGORIES) + 1
    assert len(EXPENSE_CATEGORIES) == 3  # input untouched


def test_add_category_rejects_blank_name():
    with pytest.raises(InvalidCategoryError):
        add_category(EXPENSE_CATEGORIES, "   ")


def test_rename_category():
    categories = rename_category(EXPENSE_CATEGORIES, "objetivos", "Investimentos")

    assert find_category(categories, "objetivos") == Category(id="objetivos", name="Investimentos")
    assert find_category(categories, "essenciais").name == "Essenciais"


def test_rename_unknown_category_raises():
    with pytest.raises(CategoryNotFoundError):
        rename_category(EXPENSE_CATEGORIES, "missing", "Nada")


def test_delete_category_unknown_id_is_noop():
    assert delete_category(EXPENSE_CATEGORIES, "missing") == EXPENSE_CATEGORIES


def test_delete_category():
    categories = delete_category(EXPENSE_CATEGORIES, "supérfluos")
    assert [c.id for c in categories] == ["essenciais", "objetivos"]


def test_resolve_category_name_fallback():
    assert resolve_category_name(EXPENSE_CATEGORIES, "objetivos", "X") == "Objetivos"
    assert resolve_category_name(EXPENSE_CATEGORIES, "gone", "X") == "X"
    assert resolve_category_name(EXPENSE_CATEGORIES, None, "X") == "X"
