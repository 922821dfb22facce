"""Core utilities and security modules."""

from reservations.core.authorization import (
    AuthorizationGuard,
    AuthorizationResult,
    Decision,
    Identity,
)
from reservations.core.exceptions import (
    AccessCheckFailed,
    AppException,
    AuthenticationError,
    AuthorizationError,
    DatesNotAvailable,
    ExternalServiceError,
    InvalidBookingStatus,
    NotFoundError,
    ValidationError,
)
from reservations.core.permissions import (
    Permission,
    PermissionRegistry,
    UserRole,
    has_permission,
    is_valid_role,
    permission_registry,
    permissions_for,
)

__all__ = [
    "AuthorizationGuard",
    "AuthorizationResult",
    "Decision",
    "Identity",
    "AccessCheckFailed",
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "DatesNotAvailable",
    "ExternalServiceError",
    "InvalidBookingStatus",
    "NotFoundError",
    "ValidationError",
    "Permission",
    "PermissionRegistry",
    "UserRole",
    "has_permission",
    "is_valid_role",
    "permission_registry",
    "permissions_for",
]
