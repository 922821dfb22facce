"""API dependencies for identity, authorization and services."""

from collections.abc import Callable
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reservations.core.authorization import (
    AuthorizationGuard,
    AuthorizationResult,
    Decision,
    Identity,
)
from reservations.core.exceptions import (
    AccessCheckFailed,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
)
from reservations.core.permissions import Permission
from reservations.core.security import identity_from_token
from reservations.services.booking_service import BookingService

# Security scheme; a missing header is reported by the guard, not here
security = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity | None:
    """Get the caller identity from the bearer token, if one was sent."""
    if not credentials:
        return None
    return identity_from_token(credentials.credentials)


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_guard(request: Request) -> AuthorizationGuard:
    return request.app.state.guard


def raise_for_authorization(result: AuthorizationResult) -> None:
    """Translate a denied guard result into the matching HTTP error."""
    if result.decision is Decision.ALLOW:
        return
    if result.decision is Decision.UNAUTHENTICATED:
        raise AuthenticationError(result.detail)
    if result.decision is Decision.NOT_FOUND:
        raise NotFoundError()
    if result.decision is Decision.CHECK_FAILED:
        raise AccessCheckFailed(result.detail)
    raise AuthorizationError(
        result.detail or "Insufficient permissions",
        missing_permissions=list(result.missing_permissions),
    )


def require_permission(*permissions: Permission | str) -> Callable[..., Any]:
    """Dependency to require every listed permission."""

    async def permission_checker(
        identity: Annotated[Identity | None, Depends(get_current_identity)],
        guard: Annotated[AuthorizationGuard, Depends(get_guard)],
    ) -> Identity:
        raise_for_authorization(guard.authorize(identity, *permissions))
        return identity

    return permission_checker


class BookingOwnershipChecker:
    """Require permissions plus ownership of the booking (admins bypass ownership)."""

    def __init__(self, *permissions: Permission | str):
        self.permissions = permissions

    async def __call__(
        self,
        booking_id: UUID,
        identity: Annotated[Identity | None, Depends(get_current_identity)],
        guard: Annotated[AuthorizationGuard, Depends(get_guard)],
        service: Annotated[BookingService, Depends(get_booking_service)],
    ) -> Identity:
        """Check booking permissions."""
        raise_for_authorization(guard.authorize(identity, *self.permissions))
        result = await guard.authorize_ownership(identity, str(booking_id), service.get_owner)
        if result.decision is Decision.NOT_FOUND:
            raise NotFoundError("Booking", str(booking_id))
        raise_for_authorization(result)
        return identity


# Convenience instances
require_booking_read = require_permission(Permission.BOOKING_READ)
require_booking_create = require_permission(Permission.BOOKING_CREATE)
require_booking_cancel = BookingOwnershipChecker(Permission.BOOKING_CANCEL)
