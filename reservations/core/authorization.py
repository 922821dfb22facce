"""Authorization guard: permission and ownership checks.

The guard never raises for a denied request. Every check returns an
``AuthorizationResult`` whose ``decision`` tells the caller which kind of
failure occurred, so the HTTP layer can answer 401, 403, 404 or 500.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from reservations.core.permissions import (
    Permission,
    PermissionRegistry,
    UserRole,
    permission_registry,
)

logger = logging.getLogger(__name__)

# Resolves the owning subject id of a resource, or None when the resource is absent
OwnerResolver = Callable[[str], Awaitable[str | None]]


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as supplied by the identity provider."""

    subject_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class Decision(str, Enum):
    """Guard decisions."""

    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CHECK_FAILED = "check_failed"


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of a guard check."""

    decision: Decision
    detail: str = ""
    missing_permissions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def allowed(self) -> bool:
        return self.decision is Decision.ALLOW

    @classmethod
    def allow(cls) -> "AuthorizationResult":
        return cls(Decision.ALLOW)


class AuthorizationGuard:
    """Checks role permissions and resource ownership before an operation runs."""

    def __init__(
        self,
        registry: PermissionRegistry | None = None,
        ownership_timeout: float | None = None,
    ) -> None:
        self.registry = registry or permission_registry
        self.ownership_timeout = ownership_timeout

    def authorize(
        self,
        identity: Identity | None,
        *permissions: str | Permission,
    ) -> AuthorizationResult:
        """Require every listed permission for the caller's role."""
        if identity is None:
            return AuthorizationResult(Decision.UNAUTHENTICATED, "Authentication required")

        missing = tuple(
            p.value if isinstance(p, Permission) else p
            for p in permissions
            if not self.registry.has_permission(identity.role, p)
        )
        if missing:
            return AuthorizationResult(
                Decision.FORBIDDEN,
                f"Role '{identity.role}' lacks required permissions",
                missing_permissions=missing,
            )
        return AuthorizationResult.allow()

    async def authorize_ownership(
        self,
        identity: Identity | None,
        resource_id: str,
        resolver: OwnerResolver,
    ) -> AuthorizationResult:
        """Require the caller to own the resource. Admins always pass.

        Args:
            identity: Authenticated caller, or None
            resource_id: Identifier handed to the resolver
            resolver: Async callable returning the owner's subject id

        Returns:
            AuthorizationResult: ``not_found`` when the resolver reports no
            owner, ``check_failed`` when it raises or exceeds the deadline
        """
        if identity is None:
            return AuthorizationResult(Decision.UNAUTHENTICATED, "Authentication required")

        if identity.is_admin:
            return AuthorizationResult.allow()

        try:
            owner_id = await asyncio.wait_for(resolver(resource_id), timeout=self.ownership_timeout)
        except Exception:
            logger.exception(f"Ownership check failed for resource {resource_id}")
            return AuthorizationResult(Decision.CHECK_FAILED, "Access check failed")

        if not owner_id:
            return AuthorizationResult(Decision.NOT_FOUND, "Resource not found")

        if owner_id != identity.subject_id:
            return AuthorizationResult(Decision.FORBIDDEN, "Access denied - not resource owner")

        return AuthorizationResult.allow()
