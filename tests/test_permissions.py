"""
Tests for role based page access
"""
import pytest

from app.core.permissions import (
    MENU_ITEMS,
    PAGE_PERMISSIONS,
    ROLE_LABELS,
    PagePermission,
    Role,
    get_accessible_menu_items,
    has_page_access,
)

@pytest.mark.unit
class TestHasPageAccess:

    def test_products_manage_is_admin_only(self):
        assert has_page_access("CUSTOMER", "PRODUCTS_MANAGE") is False
        assert has_page_access("STAFF", "PRODUCTS_MANAGE") is False
        assert has_page_access("ADMIN", "PRODUCTS_MANAGE") is True

    def test_dashboard_open_to_every_role(self):
        for role in Role:
            assert has_page_access(role, PagePermission.DASHBOARD) is True

    def test_back_office_pages(self):
        for tag in ("POS", "INVENTORY", "PRODUCTS_VIEW", "CUSTOMERS", "ORDERS"):
            assert has_page_access(Role.STAFF, tag) is True
            assert has_page_access(Role.ADMIN, tag) is True
            assert has_page_access(Role.CUSTOMER, tag) is False

    def test_missing_role_has_no_access(self):
        assert has_page_access(None, PagePermission.DASHBOARD) is False

    def test_unknown_role_or_tag_has_no_access(self):
        assert has_page_access("MANAGER", "DASHBOARD") is False
        assert has_page_access("ADMIN", "NOT_A_PAGE") is False

    def test_every_tag_is_mapped(self):
        assert set(PAGE_PERMISSIONS) == set(PagePermission)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            PAGE_PERMISSIONS[PagePermission.USERS] = frozenset(Role)
        with pytest.raises(AttributeError):
            PAGE_PERMISSIONS[PagePermission.USERS].add(Role.STAFF)
        assert set(ROLE_LABELS) == set(Role)

@pytest.mark.unit
class TestAccessibleMenuItems:

    def test_missing_role_gets_empty_menu(self):
        assert get_accessible_menu_items(None) == []
        assert get_accessible_menu_items("GUEST") == []

    def test_admin_sees_everything_in_declared_order(self):
        assert get_accessible_menu_items(Role.ADMIN) == list(MENU_ITEMS)

    def test_staff_menu_excludes_admin_only_entries(self):
        ids = [item.id for item in get_accessible_menu_items("STAFF")]

        assert ids == ["dashboard", "pos", "inventory", "customers", "orders"]
        assert "users" not in ids
        assert "revenue" not in ids

    def test_customer_menu(self):
        assert [item.id for item in get_accessible_menu_items(Role.CUSTOMER)] == ["dashboard"]

    def test_menu_items_are_frozen(self):
        with pytest.raises(Exception):
            MENU_ITEMS[0].label = "Changed"
