"""User account operation tests."""

import pytest

from core.exceptions import DuplicateKeyError
from schemas.user import User


class TestRegistration:

    def test_store_starts_empty(self, store):
        assert store.is_empty() is True
        assert store.users.is_empty() is True

    def test_register_assigns_id_and_defaults(self, store):
        user = store.users.register(User(user_name="alice", password="pw", role="admin"))

        assert user.id is not None
        assert user.notifications == ""
        assert user.forgot_password is False
        assert store.is_empty() is False

    def test_register_then_lookups_agree(self, store, make_user):
        user = make_user("bob", role="Student")

        assert store.users.user_exists("bob") is True
        assert store.users.get_role("bob") == "Student"
        assert store.users.get_user_id("bob") == user.id
        assert store.users.get_role_by_id(user.id) == "Student"

    def test_register_none_notifications_stored_empty(self, store):
        user = store.users.register(
            User(user_name="carol", password="pw", role="Student", notifications=None)
        )
        assert store.notifications.get_notifications(user.id) == ""

    def test_duplicate_user_name_rejected(self, store, make_user):
        make_user("bob")
        with pytest.raises(DuplicateKeyError) as exc_info:
            make_user("bob", role="Instructor")

        assert exc_info.value.key == "bob"
        assert store.users.get_role("bob") == "Student"

    def test_unknown_user_lookups(self, store):
        assert store.users.user_exists("ghost") is False
        assert store.users.get_role("ghost") is None
        assert store.users.get_role_by_id(999) is None
        assert store.users.get_user_id("ghost") is None
        assert store.users.get_user("ghost") is None

    def test_list_users_in_id_order(self, store, make_user):
        make_user("first")
        make_user("second")

        names = [u.user_name for u in store.users.list_users()]
        assert names == ["first", "second"]


class TestLogin:

    def test_login_requires_all_three_fields(self, store, make_user):
        make_user("dave", role="Instructor", password="Secret1!")

        assert store.users.login("dave", "Secret1!", "Instructor") is True
        assert store.users.login("dave", "secret1!", "Instructor") is False
        assert store.users.login("Dave", "Secret1!", "Instructor") is False
        assert store.users.login("dave", "Secret1!", "Student") is False

    def test_login_fails_after_password_change(self, store, make_user):
        user = make_user("erin", password="OldPass1!")

        assert store.users.set_password(user.id, "NewPass1!") is True
        assert store.users.login("erin", "OldPass1!", "Student") is False
        assert store.users.login("erin", "NewPass1!", "Student") is True

    def test_set_password_unknown_user(self, store):
        assert store.users.set_password(42, "x") is False


class TestRoles:

    def test_change_role(self, store, make_user):
        user = make_user("frank", role="Student")

        assert store.users.change_role(user.id, "Student, Reviewer") is True
        assert store.users.get_role("frank") == "Student, Reviewer"
        assert store.users.change_role(999, "admin") is False

    def test_first_admin_is_exact_match(self, store, make_user):
        assert store.users.get_first_admin() is None
        make_user("notadmin", role="Admin")
        make_user("also", role="admin, Instructor")
        assert store.users.get_first_admin() is None

        make_user("root", role="admin")
        assert store.users.get_first_admin() == "root"

    def test_reviewer_usernames_substring_case_sensitive(self, store, make_user):
        make_user("rev1", role="Reviewer")
        make_user("rev2", role="Student, Reviewer")
        make_user("lower", role="reviewer")
        make_user("stud", role="Student")

        assert store.users.get_all_reviewer_usernames() == ["rev1", "rev2"]


class TestForgotPassword:

    def test_toggle_is_an_involution(self, store, make_user):
        user = make_user("gina")
        assert store.users.get_forgot_password_status(user.id) is False

        assert store.users.toggle_forgot_password(user.id) is True
        assert store.users.get_forgot_password_status(user.id) is True

        assert store.users.toggle_forgot_password(user.id) is True
        assert store.users.get_forgot_password_status(user.id) is False

    def test_toggle_unknown_user(self, store):
        assert store.users.toggle_forgot_password(999) is False
        assert store.users.get_forgot_password_status(999) is False


class TestRemoveUser:

    def test_remove_user(self, store, make_user):
        user = make_user("henry")

        assert store.users.remove_user(user.id) is True
        assert store.users.user_exists("henry") is False
        assert store.users.remove_user(user.id) is False

    def test_remove_user_leaves_ratings(self, store, make_user):
        reviewer = make_user("ivan", role="Reviewer")
        store.ratings.add_or_update_rating("ivan", 4, "judy")

        store.users.remove_user(reviewer.id)

        assert store.ratings.rating_exists("ivan", "judy") is True
