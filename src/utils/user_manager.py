"""User management utilities.

This module provides user account storage: registration, plain-text login
checks, role lookups and changes, password resets and the forgot-password
flag. Lookups that find nothing return ``None``; storage faults are logged
and turned into the operation's default result, except where noted.
"""

import logging
from typing import List, Optional

from sqlalchemy import not_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import ADMIN_ROLE, REVIEWER_ROLE_MARKER
from core.database import Database, storage_fallback
from core.exceptions import DuplicateKeyError, StorageUnavailableError
from models.user import UserModel
from schemas.user import User
from utils.converters import model_to_user, user_to_model

logger = logging.getLogger(__name__)


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, database: Database):
        """Initialize UserManager.

        Args:
            database: Connected (or later connected) database handle.
        """
        self.database = database

    @storage_fallback(False)
    def is_empty(self) -> bool:
        """Return True if no user has been registered yet."""
        with self.database.session() as db:
            return db.query(UserModel.id).first() is None

    def register(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User to store. ``notifications`` of None is stored as "".

        Returns:
            The stored User, with its assigned id.

        Raises:
            DuplicateKeyError: If the user name is already taken.
            StorageUnavailableError: If the insert fails for another reason.
        """
        try:
            with self.database.session() as db:
                model = user_to_model(user)
                db.add(model)
                db.commit()
                db.refresh(model)
                created = model_to_user(model)
        except IntegrityError as e:
            raise DuplicateKeyError(UserModel.__tablename__, user.user_name) from e
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Cannot register user: {e}") from e

        logger.info("Registered user: %s (%s)", created.user_name, created.role)
        return created

    @storage_fallback(False)
    def remove_user(self, user_id: int) -> bool:
        """Delete a user by id. Their ratings are left in place."""
        with self.database.session() as db:
            deleted = (
                db.query(UserModel)
                .filter(UserModel.id == user_id)
                .delete(synchronize_session=False)
            )
            db.commit()
        if deleted:
            logger.info("Removed user id %s", user_id)
        return deleted > 0

    @storage_fallback(False)
    def login(self, user_name: str, password: str, role: str) -> bool:
        """Return True if a user matches name, password and role exactly."""
        with self.database.session() as db:
            match = (
                db.query(UserModel.id)
                .filter(
                    UserModel.user_name == user_name,
                    UserModel.password == password,
                    UserModel.role == role,
                )
                .first()
            )
        return match is not None

    @storage_fallback(False)
    def user_exists(self, user_name: str) -> bool:
        with self.database.session() as db:
            return (
                db.query(UserModel.id).filter(UserModel.user_name == user_name).first()
                is not None
            )

    @storage_fallback(None)
    def get_user(self, user_name: str) -> Optional[User]:
        with self.database.session() as db:
            model = db.query(UserModel).filter(UserModel.user_name == user_name).first()
            if model:
                return model_to_user(model)
        return None

    @storage_fallback(list)
    def list_users(self) -> List[User]:
        """List all users ordered by id."""
        with self.database.session() as db:
            models = db.query(UserModel).order_by(UserModel.id).all()
            return [model_to_user(m) for m in models]

    @storage_fallback(None)
    def get_role(self, user_name: str) -> Optional[str]:
        with self.database.session() as db:
            row = db.query(UserModel.role).filter(UserModel.user_name == user_name).first()
        return row.role if row else None

    @storage_fallback(None)
    def get_role_by_id(self, user_id: int) -> Optional[str]:
        with self.database.session() as db:
            row = db.query(UserModel.role).filter(UserModel.id == user_id).first()
        return row.role if row else None

    @storage_fallback(None)
    def get_user_id(self, user_name: str) -> Optional[int]:
        with self.database.session() as db:
            row = db.query(UserModel.id).filter(UserModel.user_name == user_name).first()
        return row.id if row else None

    @storage_fallback(False)
    def change_role(self, user_id: int, role: str) -> bool:
        updated = self._update(user_id, {UserModel.role: role})
        if updated:
            logger.info("Changed role of user id %s to %s", user_id, role)
        return updated

    @storage_fallback(None)
    def get_first_admin(self) -> Optional[str]:
        """Return the name of any user whose role is exactly ``admin``."""
        with self.database.session() as db:
            row = (
                db.query(UserModel.user_name)
                .filter(UserModel.role == ADMIN_ROLE)
                .order_by(UserModel.id)
                .first()
            )
        return row.user_name if row else None

    @storage_fallback(False)
    def set_password(self, user_id: int, password: str) -> bool:
        return self._update(user_id, {UserModel.password: password})

    @storage_fallback(False)
    def toggle_forgot_password(self, user_id: int) -> bool:
        """Flip the forgot-password flag in a single UPDATE.

        Returns:
            True if the user exists and the flag was flipped.
        """
        updated = self._update(
            user_id, {UserModel.forgot_password: not_(UserModel.forgot_password)}
        )
        if updated:
            logger.info("Toggled forgot-password flag for user id %s", user_id)
        return updated

    @storage_fallback(False)
    def get_forgot_password_status(self, user_id: int) -> bool:
        with self.database.session() as db:
            row = (
                db.query(UserModel.forgot_password)
                .filter(UserModel.id == user_id)
                .first()
            )
        return bool(row.forgot_password) if row else False

    def get_all_reviewer_usernames(self) -> List[str]:
        """List user names whose role contains ``Reviewer`` (case-sensitive).

        The match runs in Python because SQLite's LIKE ignores case.

        Raises:
            StorageUnavailableError: If the query fails. Unlike the other
                lookups this one does not fall back to an empty list.
        """
        try:
            with self.database.session() as db:
                rows = db.query(UserModel.user_name, UserModel.role).order_by(UserModel.id).all()
        except SQLAlchemyError as e:
            logger.error("Failed to list reviewers: %s", e)
            raise StorageUnavailableError(f"Cannot list reviewers: {e}") from e
        return [row.user_name for row in rows if REVIEWER_ROLE_MARKER in (row.role or "")]

    def _update(self, user_id: int, values: dict) -> bool:
        with self.database.session() as db:
            updated = (
                db.query(UserModel)
                .filter(UserModel.id == user_id)
                .update(values, synchronize_session=False)
            )
            db.commit()
        return updated > 0
