"""Tests for the plan catalog"""

import pytest

from src.domain.exceptions import ValidationException
from src.domain.plans import GROWTH, PLAN_CATALOG, PRO, STARTER, get_plan


def test_catalog_order_and_keys():
    assert [plan.key for plan in PLAN_CATALOG] == ["starter", "growth", "pro"]


def test_caps_grow_with_the_plan():
    for smaller, larger in zip(PLAN_CATALOG, PLAN_CATALOG[1:]):
        assert smaller.max_users < larger.max_users
        assert smaller.max_messages < larger.max_messages
        assert smaller.max_storage_bytes < larger.max_storage_bytes
        assert set(smaller.modules) <= set(larger.modules)


def test_module_gating():
    assert not STARTER.has_module("marketing")
    assert GROWTH.has_module("marketing")
    assert not GROWTH.has_module("REPORTS")
    assert PRO.has_module("reports")


def test_get_plan_is_case_insensitive():
    assert get_plan(" Pro ") is PRO

    with pytest.raises(ValidationException):
        get_plan("enterprise")


def test_to_plan_info():
    info = PRO.to_plan_info("plan-pro")

    assert info.id == "plan-pro"
    assert info.name == "Pro"
    assert "ADVANCED_REPORTS" in info.features
    assert "REPORTS" in info.modules
