"""Invitation code tests."""

import uuid

import pytest

from core.exceptions import DuplicateKeyError
from utils import invitation_manager


@pytest.fixture()
def fixed_uuid(monkeypatch):
    value = uuid.UUID("ab120000-0000-4000-8000-000000000000")
    monkeypatch.setattr(invitation_manager.uuid, "uuid4", lambda: value)
    return value


class TestInvitationCodes:

    def test_generated_code_is_four_characters(self, store):
        code = store.invitations.generate_code("Student")

        assert len(code) == 4
        assert store.invitations.get_role_for_code(code) == "Student"

    def test_code_redeems_exactly_once(self, store, fixed_uuid):
        code = store.invitations.generate_code("Instructor")

        assert code == "ab12"
        assert store.invitations.get_role_for_code("ab12") == "Instructor"
        assert store.invitations.validate_and_consume("ab12") is True
        assert store.invitations.validate_and_consume("ab12") is False

    def test_role_still_readable_after_redeem(self, store):
        code = store.invitations.generate_code("Reviewer")
        store.invitations.validate_and_consume(code)

        assert store.invitations.get_role_for_code(code) == "Reviewer"

    def test_unknown_code(self, store):
        assert store.invitations.get_role_for_code("zzzz") is None
        assert store.invitations.validate_and_consume("zzzz") is False
        store.invitations.mark_used("zzzz")

    def test_mark_used_blocks_redeem(self, store):
        code = store.invitations.generate_code("Student")
        store.invitations.mark_used(code)

        assert store.invitations.validate_and_consume(code) is False

    def test_collision_raises_duplicate_key(self, store, fixed_uuid):
        store.invitations.generate_code("Student")

        with pytest.raises(DuplicateKeyError):
            store.invitations.generate_code("Instructor")
        assert store.invitations.get_role_for_code("ab12") == "Student"

    def test_list_codes(self, store):
        store.invitations.generate_code("Student")
        code = store.invitations.generate_code("Instructor")
        store.invitations.validate_and_consume(code)

        codes = store.invitations.list_codes()
        assert len(codes) == 2
        instructor_codes = store.invitations.list_codes(role="Instructor")
        assert [(c.code, c.is_used) for c in instructor_codes] == [(code, True)]
