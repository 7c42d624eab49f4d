"""Tests for modules/auth/authorization.py."""

from modules.auth.authorization import admin_secret_matches, resolve_access
from shared.models import Identity, IdentitySource


def _identity(uid: str, **claims) -> Identity:
    return Identity(subject_id=uid, claims={"uid": uid, **claims}, source=IdentitySource.BEARER)


class TestResolveAccess:
    def test_stored_admin(self, fake_db, users):
        fake_db.seed("users", firebase_uid="uid-1", role="admin")
        access = resolve_access(_identity("uid-1"), users)
        assert access.is_admin
        assert access.user.firebase_uid == "uid-1"

    def test_stored_role_overrides_admin_claim(self, fake_db, users):
        """A record that says user wins over a token claiming admin."""
        fake_db.seed("users", firebase_uid="uid-1", role="user")
        assert not resolve_access(_identity("uid-1", admin=True), users).is_admin

    def test_claim_counts_without_record(self, users):
        assert resolve_access(_identity("uid-1", admin=True), users).is_admin
        assert resolve_access(_identity("uid-2", role="admin"), users).is_admin

    def test_claim_ignored_when_fallback_disabled(self, users):
        assert not resolve_access(_identity("uid-1", admin=True), users, admin_claim_fallback=False).is_admin

    def test_truthy_non_boolean_claim_is_not_admin(self, users):
        assert not resolve_access(_identity("uid-1", admin="yes"), users).is_admin

    def test_record_without_role_is_plain_user(self, fake_db, users):
        fake_db.seed("users", firebase_uid="uid-1", role=None)
        access = resolve_access(_identity("uid-1"), users)
        assert not access.is_admin
        assert access.user.role == "user"

    def test_no_record_no_claim(self, users):
        access = resolve_access(_identity("uid-1"), users)
        assert access.user is None
        assert not access.is_admin


class TestOwnership:
    def test_owns_both_id_shapes(self, fake_db, users):
        row = fake_db.seed("users", firebase_uid="uid-1")
        access = resolve_access(_identity("uid-1"), users)
        assert access.owns("uid-1")
        assert access.owns(row["id"])
        assert not access.owns("uid-2")
        assert not access.owns(None)

    def test_owns_subject_without_record(self, users):
        access = resolve_access(_identity("uid-1"), users)
        assert access.owns("uid-1")
        assert not access.owns("6f1c2b1a-1111-4c39-9d8e-0c1c1f3e2a11")


class TestAdminSecret:
    def test_matches(self):
        assert admin_secret_matches("s3cret", "s3cret")

    def test_mismatch(self):
        assert not admin_secret_matches("guess", "s3cret")

    def test_never_matches_when_unconfigured(self):
        assert not admin_secret_matches("", "")
        assert not admin_secret_matches("anything", "")

    def test_missing_header(self):
        assert not admin_secret_matches(None, "s3cret")
