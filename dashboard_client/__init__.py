# dashboard_client/__init__.py

from .api import ApiClient, ApiError
from .access import (
    ROUTE_REQUIREMENTS,
    can_view_route,
    has_component_access,
    has_menu_access,
    has_sub_menu_access,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ROUTE_REQUIREMENTS",
    "can_view_route",
    "has_component_access",
    "has_menu_access",
    "has_sub_menu_access",
]
