"""
Tests: Authorization guard
==========================
Permission checks, ownership checks and the failure kinds they report.
"""

import asyncio

import pytest

from reservations.core.authorization import (
    AuthorizationGuard,
    Decision,
    Identity,
)
from reservations.core.permissions import Permission

CUSTOMER = Identity(subject_id="customer-1", role="customer")
OTHER_CUSTOMER = Identity(subject_id="customer-2", role="customer")
ADMIN = Identity(subject_id="admin-1", role="admin")
HOST = Identity(subject_id="host-1", role="host")


def owners(mapping: dict[str, str]):
    async def resolve(resource_id: str) -> str | None:
        return mapping.get(resource_id)

    return resolve


@pytest.fixture
def guard() -> AuthorizationGuard:
    return AuthorizationGuard(ownership_timeout=0.5)


class TestAuthorize:
    def test_missing_identity_is_unauthenticated(self, guard):
        result = guard.authorize(None, Permission.BOOKING_CREATE)
        assert result.decision is Decision.UNAUTHENTICATED
        assert not result.allowed

    def test_allows_when_role_holds_permission(self, guard):
        assert guard.authorize(CUSTOMER, Permission.BOOKING_CREATE).allowed

    def test_lists_missing_permissions(self, guard):
        result = guard.authorize(HOST, "booking:read", "booking:create", "booking:cancel")
        assert result.decision is Decision.FORBIDDEN
        assert result.missing_permissions == ("booking:create", "booking:cancel")

    def test_requires_every_permission(self, guard):
        result = guard.authorize(CUSTOMER, "booking:create", "booking:delete")
        assert result.decision is Decision.FORBIDDEN
        assert result.missing_permissions == ("booking:delete",)

    def test_delete_is_forbidden_for_customer_but_allowed_for_admin(self, guard):
        denied = guard.authorize(CUSTOMER, Permission.BOOKING_DELETE)
        assert denied.decision is Decision.FORBIDDEN
        assert denied.missing_permissions == ("booking:delete",)
        assert guard.authorize(ADMIN, Permission.BOOKING_DELETE).allowed

    def test_admin_holds_everything(self, guard):
        assert guard.authorize(ADMIN, "booking:delete", "payment:refund").allowed

    def test_unknown_role_is_forbidden(self, guard):
        result = guard.authorize(Identity("x", "superuser"), "booking:read")
        assert result.decision is Decision.FORBIDDEN


class TestAuthorizeOwnership:
    async def test_owner_is_allowed(self, guard):
        result = await guard.authorize_ownership(CUSTOMER, "b1", owners({"b1": "customer-1"}))
        assert result.allowed

    async def test_non_owner_is_forbidden(self, guard):
        result = await guard.authorize_ownership(OTHER_CUSTOMER, "b1", owners({"b1": "customer-1"}))
        assert result.decision is Decision.FORBIDDEN
        assert result.detail == "Access denied - not resource owner"

    async def test_missing_resource_is_not_found(self, guard):
        result = await guard.authorize_ownership(CUSTOMER, "missing", owners({}))
        assert result.decision is Decision.NOT_FOUND

    async def test_admin_skips_the_resolver(self, guard):
        calls = []

        async def resolve(resource_id: str) -> str | None:
            calls.append(resource_id)
            return "someone-else"

        result = await guard.authorize_ownership(ADMIN, "b1", resolve)
        assert result.allowed
        assert calls == []

    async def test_missing_identity_is_unauthenticated(self, guard):
        result = await guard.authorize_ownership(None, "b1", owners({"b1": "customer-1"}))
        assert result.decision is Decision.UNAUTHENTICATED

    async def test_resolver_error_is_check_failed(self, guard):
        async def broken(resource_id: str) -> str | None:
            raise ConnectionError("store unreachable")

        result = await guard.authorize_ownership(CUSTOMER, "b1", broken)
        assert result.decision is Decision.CHECK_FAILED
        assert not result.allowed

    async def test_slow_resolver_is_check_failed(self):
        guard = AuthorizationGuard(ownership_timeout=0.01)

        async def slow(resource_id: str) -> str | None:
            await asyncio.sleep(1)
            return "customer-1"

        result = await guard.authorize_ownership(CUSTOMER, "b1", slow)
        assert result.decision is Decision.CHECK_FAILED
