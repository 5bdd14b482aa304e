"""Security module with RBAC dependencies."""

from access_core.web.security.rbac import require_all_permissions, require_any_permission, require_permission

__all__ = ["require_permission", "require_any_permission", "require_all_permissions"]
