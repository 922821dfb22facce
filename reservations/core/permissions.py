"""Role-based access control and permissions."""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

# Grants every permission when present in a role's set
WILDCARD = "*"


class UserRole(str, Enum):
    """User roles in the system."""

    ADMIN = "admin"
    HOST = "host"
    GUIDE = "guide"
    CUSTOMER = "customer"


class Permission(str, Enum):
    """System permissions in ``resource:action`` form."""

    # Homestay permissions
    HOMESTAY_CREATE = "homestay:create"
    HOMESTAY_READ = "homestay:read"
    HOMESTAY_UPDATE = "homestay:update"
    HOMESTAY_DELETE = "homestay:delete"

    # Guide permissions
    GUIDE_READ = "guide:read"
    GUIDE_UPDATE = "guide:update"

    PRODUCT_READ = "product:read"
    SEARCH_READ = "search:read"

    # Booking permissions
    BOOKING_CREATE = "booking:create"
    BOOKING_READ = "booking:read"
    BOOKING_UPDATE = "booking:update"
    BOOKING_CANCEL = "booking:cancel"
    BOOKING_DELETE = "booking:delete"

    # Profile permissions
    PROFILE_READ = "profile:read"
    PROFILE_UPDATE = "profile:update"


# Role to permissions mapping
_ROLE_PERMISSIONS: dict[UserRole, set[str]] = {
    UserRole.ADMIN: {WILDCARD},
    UserRole.HOST: {
        Permission.HOMESTAY_CREATE.value,
        Permission.HOMESTAY_READ.value,
        Permission.HOMESTAY_UPDATE.value,
        Permission.HOMESTAY_DELETE.value,
        Permission.BOOKING_READ.value,
        Permission.BOOKING_UPDATE.value,
        Permission.PROFILE_READ.value,
        Permission.PROFILE_UPDATE.value,
    },
    UserRole.GUIDE: {
        Permission.GUIDE_READ.value,
        Permission.GUIDE_UPDATE.value,
        Permission.BOOKING_READ.value,
        Permission.PROFILE_READ.value,
        Permission.PROFILE_UPDATE.value,
    },
    UserRole.CUSTOMER: {
        Permission.HOMESTAY_READ.value,
        Permission.GUIDE_READ.value,
        Permission.PRODUCT_READ.value,
        Permission.BOOKING_CREATE.value,
        Permission.BOOKING_READ.value,
        Permission.BOOKING_CANCEL.value,
        Permission.SEARCH_READ.value,
        Permission.PROFILE_READ.value,
        Permission.PROFILE_UPDATE.value,
    },
}


def _role_key(role: "str | UserRole | None") -> str | None:
    if isinstance(role, UserRole):
        return role.value
    return role


def _permission_key(permission: "str | Permission") -> str:
    if isinstance(permission, Permission):
        return permission.value
    return permission


class PermissionRegistry:
    """Read-only view over a role to permission table.

    The table is frozen when the registry is built; later changes to the
    source mapping are not visible.
    """

    def __init__(self, table: Mapping[UserRole, Iterable[str]]) -> None:
        self._table: Mapping[str, frozenset[str]] = MappingProxyType(
            {role.value: frozenset(perms) for role, perms in table.items()}
        )

    def has_permission(self, role: str | UserRole | None, permission: str | Permission) -> bool:
        """Check if a role has a specific permission."""
        permissions = self.permissions_for(role)
        if WILDCARD in permissions:
            return True
        return _permission_key(permission) in permissions

    def permissions_for(self, role: str | UserRole | None) -> frozenset[str]:
        """Get the permission set for a role (empty for unknown roles)."""
        key = _role_key(role)
        if key is None:
            return frozenset()
        return self._table.get(key, frozenset())

    def is_valid_role(self, candidate: object) -> bool:
        """Check if a value names a known role."""
        return isinstance(candidate, str) and _role_key(candidate) in self._table


permission_registry = PermissionRegistry(_ROLE_PERMISSIONS)


def has_permission(role: str | UserRole | None, permission: str | Permission) -> bool:
    """Check if a role has a specific permission."""
    return permission_registry.has_permission(role, permission)


def permissions_for(role: str | UserRole | None) -> frozenset[str]:
    """Get the permission set for a role."""
    return permission_registry.permissions_for(role)


def is_valid_role(candidate: object) -> bool:
    """Check if a value names a known role."""
    return permission_registry.is_valid_role(candidate)
