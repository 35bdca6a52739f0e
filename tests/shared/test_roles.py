import pytest

from shared.core.roles import (
    NoClaim,
    RolesClaim,
    UserRoleClaim,
    canonical_roles,
    is_admin,
    normalize_roles,
    parse_identity,
    parse_token_claims,
)


class TestParseIdentity:

    def test_roles_sequence(self):
        assert parse_identity({"roles": ["admin"]}) == RolesClaim(("admin",))

    def test_user_role(self):
        assert parse_identity({"user": {"role": "Admin"}}) == UserRoleClaim("Admin")

    def test_roles_take_precedence_over_user_role(self):
        claim = parse_identity({"roles": ["staff"], "user": {"role": "admin"}})
        assert claim == RolesClaim(("staff",))

    @pytest.mark.parametrize("payload", [None, [], "ADMIN", {}, {"roles": "ADMIN"}, {"user": {}}, {"user": "admin"}])
    def test_unrecognised_shapes(self, payload):
        assert parse_identity(payload) == NoClaim()


class TestCanonicalRoles:

    def test_strings_and_named_objects_are_uppercased(self):
        roles = canonical_roles(RolesClaim(("admin", {"name": "Staff"}, " vet ")))
        assert roles == frozenset({"ADMIN", "STAFF", "VET"})

    def test_single_user_role(self):
        assert canonical_roles(UserRoleClaim("admin")) == frozenset({"ADMIN"})

    def test_no_claim_is_empty(self):
        assert canonical_roles(NoClaim()) == frozenset()

    def test_blank_entries_are_dropped(self):
        assert canonical_roles(RolesClaim(("", "  ", {"name": ""}, {"id": 7}))) == frozenset()


class TestNormalizeRoles:

    @pytest.mark.parametrize("payload, admin", [
        ({"roles": ["ADMIN"]}, True),
        ({"roles": [{"name": "admin"}]}, True),
        ({"user": {"role": "admin"}}, True),
        ({"roles": ["STAFF"]}, False),
        ({"user": {"role": "owner"}}, False),
        ({}, False),
    ])
    def test_admin_detection(self, payload, admin):
        assert is_admin(normalize_roles(payload)) is admin


class TestParseTokenClaims:

    def test_flat_role(self):
        assert canonical_roles(parse_token_claims({"sub": "u", "role": "admin"})) == frozenset({"ADMIN"})

    def test_roles_list(self):
        assert canonical_roles(parse_token_claims({"roles": ["a", "b"]})) == frozenset({"A", "B"})

    def test_no_roles(self):
        assert parse_token_claims({"sub": "u"}) == NoClaim()
