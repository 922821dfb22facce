"""
Tests: Permission registry
==========================
Fixed role table, wildcard for admin, fail-closed for unknown roles.
"""

import pytest

from reservations.core.permissions import (
    WILDCARD,
    Permission,
    PermissionRegistry,
    UserRole,
    has_permission,
    is_valid_role,
    permission_registry,
    permissions_for,
)


class TestHasPermission:
    def test_customer_can_create_and_cancel_bookings(self):
        assert has_permission("customer", "booking:create") is True
        assert has_permission("customer", "booking:cancel") is True

    def test_customer_cannot_delete_bookings(self):
        assert has_permission("customer", "booking:delete") is False

    def test_admin_wildcard_grants_anything(self):
        assert has_permission(UserRole.ADMIN, Permission.BOOKING_DELETE) is True
        assert has_permission("admin", "anything:at-all") is True

    def test_host_reads_but_cannot_cancel_bookings(self):
        assert has_permission("host", "booking:read") is True
        assert has_permission("host", "booking:cancel") is False

    def test_guide_permissions(self):
        assert has_permission("guide", Permission.GUIDE_UPDATE) is True
        assert has_permission("guide", "homestay:create") is False

    def test_exact_match_only(self):
        # no prefix or glob matching besides the reserved wildcard
        assert has_permission("customer", "booking:*") is False
        assert has_permission("customer", "booking") is False
        assert has_permission("customer", "Booking:Create") is False

    def test_unknown_role_fails_closed(self):
        assert has_permission("superuser", "booking:read") is False
        assert has_permission(None, "booking:read") is False

    def test_enum_and_string_forms_agree(self):
        assert has_permission(UserRole.CUSTOMER, Permission.BOOKING_CREATE) == has_permission(
            "customer", "booking:create"
        )


class TestPermissionsFor:
    def test_admin_holds_only_the_wildcard(self):
        assert permissions_for("admin") == frozenset({WILDCARD})

    def test_customer_permission_set(self):
        assert permissions_for(UserRole.CUSTOMER) == frozenset({
            "homestay:read",
            "guide:read",
            "product:read",
            "booking:create",
            "booking:read",
            "booking:cancel",
            "search:read",
            "profile:read",
            "profile:update",
        })

    def test_unknown_role_has_empty_set(self):
        assert permissions_for("nobody") == frozenset()

    def test_returned_set_is_immutable(self):
        perms = permissions_for("host")
        with pytest.raises(AttributeError):
            perms.add("booking:cancel")  # type: ignore[attr-defined]
        assert has_permission("host", "booking:cancel") is False


class TestIsValidRole:
    @pytest.mark.parametrize("role", ["admin", "host", "guide", "customer"])
    def test_known_roles(self, role):
        assert is_valid_role(role) is True

    @pytest.mark.parametrize("candidate", ["Admin", "guest", "", None, 3])
    def test_unknown_values(self, candidate):
        assert is_valid_role(candidate) is False


class TestRegistryIsolation:
    def test_table_is_copied_on_construction(self):
        table = {UserRole.CUSTOMER: {"booking:read"}}
        registry = PermissionRegistry(table)
        table[UserRole.CUSTOMER].add("booking:delete")
        assert registry.has_permission("customer", "booking:delete") is False

    def test_process_registry_cannot_be_mutated(self):
        with pytest.raises(TypeError):
            permission_registry._table["customer"] = frozenset({WILDCARD})  # type: ignore[index]
