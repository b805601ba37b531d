"""
Role based page access.

The permission table and the navigation menu are module level constants built
once at import time and exposed read-only. Callers ask two questions:
``has_page_access(role, tag)`` and ``get_accessible_menu_items(role)``.
A missing or unknown role, or an unknown tag, simply means "no access".
"""
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, FrozenSet, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict

class Role(str, Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CUSTOMER = "CUSTOMER"

class PagePermission(str, Enum):
    DASHBOARD = "DASHBOARD"
    POS = "POS"
    INVENTORY = "INVENTORY"
    PRODUCTS_VIEW = "PRODUCTS_VIEW"
    CUSTOMERS = "CUSTOMERS"
    ORDERS = "ORDERS"
    PRODUCTS_MANAGE = "PRODUCTS_MANAGE"
    USERS = "USERS"
    ANALYTICS = "ANALYTICS"
    REPORTS = "REPORTS"
    REVENUE = "REVENUE"
    CATEGORIES = "CATEGORIES"
    SETTINGS = "SETTINGS"

_EVERYONE = frozenset({Role.ADMIN, Role.STAFF, Role.CUSTOMER})
_BACK_OFFICE = frozenset({Role.ADMIN, Role.STAFF})
_ADMIN_ONLY = frozenset({Role.ADMIN})

PAGE_PERMISSIONS: Mapping[PagePermission, FrozenSet[Role]] = MappingProxyType({
    PagePermission.DASHBOARD: _EVERYONE,

    PagePermission.POS: _BACK_OFFICE,
    PagePermission.INVENTORY: _BACK_OFFICE,
    PagePermission.PRODUCTS_VIEW: _BACK_OFFICE,
    PagePermission.CUSTOMERS: _BACK_OFFICE,
    PagePermission.ORDERS: _BACK_OFFICE,

    PagePermission.PRODUCTS_MANAGE: _ADMIN_ONLY,
    PagePermission.USERS: _ADMIN_ONLY,
    PagePermission.ANALYTICS: _ADMIN_ONLY,
    PagePermission.REPORTS: _ADMIN_ONLY,
    PagePermission.REVENUE: _ADMIN_ONLY,
    PagePermission.CATEGORIES: _ADMIN_ONLY,
    PagePermission.SETTINGS: _ADMIN_ONLY,
})

ROLE_LABELS: Mapping[Role, str] = MappingProxyType({
    Role.ADMIN: "Administrator",
    Role.STAFF: "Staff",
    Role.CUSTOMER: "Customer",
})

ROLE_COLORS: Mapping[Role, str] = MappingProxyType({
    Role.ADMIN: "bg-red-100 text-red-800",
    Role.STAFF: "bg-blue-100 text-blue-800",
    Role.CUSTOMER: "bg-green-100 text-green-800",
})

class MenuItem(BaseModel):
    id: str
    label: str
    href: str
    icon: str
    permission: PagePermission
    description: Optional[str] = None

    model_config = ConfigDict(frozen=True)

MENU_ITEMS: Tuple[MenuItem, ...] = (
    MenuItem(
        id="dashboard",
        label="Dashboard",
        href="/dashboard",
        icon="Home",
        permission=PagePermission.DASHBOARD,
        description="Overview and statistics",
    ),
    MenuItem(
        id="pos",
        label="Point of Sale",
        href="/dashboard/pos",
        icon="ShoppingCart",
        permission=PagePermission.POS,
        description="Sales transactions",
    ),
    MenuItem(
        id="inventory",
        label="Inventory",
        href="/dashboard/inventory",
        icon="Package",
        permission=PagePermission.INVENTORY,
        description="Stock tracking and adjustments",
    ),
    MenuItem(
        id="products",
        label="Products",
        href="/dashboard/products",
        icon="Box",
        permission=PagePermission.PRODUCTS_MANAGE,
        description="Create, edit and delete products",
    ),
    MenuItem(
        id="customers",
        label="Customers",
        href="/dashboard/customers",
        icon="Users",
        permission=PagePermission.CUSTOMERS,
        description="Customer records",
    ),
    MenuItem(
        id="orders",
        label="Orders",
        href="/dashboard/orders",
        icon="FileText",
        permission=PagePermission.ORDERS,
        description="Order tracking",
    ),
    MenuItem(
        id="categories",
        label="Categories",
        href="/dashboard/categories",
        icon="Folder",
        permission=PagePermission.CATEGORIES,
        description="Product categories",
    ),
    MenuItem(
        id="users",
        label="Staff",
        href="/dashboard/users",
        icon="UserCog",
        permission=PagePermission.USERS,
        description="Staff accounts and roles",
    ),
    MenuItem(
        id="analytics",
        label="Analytics",
        href="/dashboard/analytics",
        icon="BarChart3",
        permission=PagePermission.ANALYTICS,
        description="Sales analytics and charts",
    ),
    MenuItem(
        id="reports",
        label="Reports",
        href="/dashboard/reports",
        icon="FileSpreadsheet",
        permission=PagePermission.REPORTS,
        description="Detailed reports",
    ),
    MenuItem(
        id="revenue",
        label="Revenue",
        href="/dashboard/revenue",
        icon="DollarSign",
        permission=PagePermission.REVENUE,
        description="Income and expense tracking",
    ),
)

RoleLike = Union[Role, str, None]
PermissionLike = Union[PagePermission, str]

def _as_role(role: RoleLike) -> Optional[Role]:
    if role is None:
        return None
    try:
        return Role(role)
    except ValueError:
        return None

def has_page_access(role: RoleLike, permission: PermissionLike) -> bool:
    """Return True if ``role`` may open pages gated by ``permission``."""
    role = _as_role(role)
    if role is None:
        return False
    try:
        allowed = PAGE_PERMISSIONS[PagePermission(permission)]
    except ValueError:
        return False
    return role in allowed

def get_accessible_menu_items(role: RoleLike) -> List[MenuItem]:
    """Static menu entries visible to ``role``, in declared order."""
    if _as_role(role) is None:
        return []
    return [item for item in MENU_ITEMS if has_page_access(role, item.permission)]
