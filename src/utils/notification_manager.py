"""Notification log utilities.

Each user carries a notification log: an ordered list of free-text messages
stored newline-joined in ``users.notifications``. Empty lines are not
messages and are dropped whenever the log is rewritten.
"""

import logging
from typing import List, Optional

from sqlalchemy import Text, case, func

from config import INSTRUCTOR_ROLE, NOTIFICATION_SEPARATOR
from core.database import Database, storage_fallback
from models.user import UserModel

logger = logging.getLogger(__name__)


def split_lines(text: Optional[str]) -> List[str]:
    """Split a stored log into its non-empty lines, keeping order."""
    if not text:
        return []
    return [line for line in text.split(NOTIFICATION_SEPARATOR) if line]


def join_lines(lines: List[str]) -> str:
    return NOTIFICATION_SEPARATOR.join(lines)


class NotificationManager:
    """Appends to, reads and rewrites users' notification logs."""

    def __init__(self, database: Database):
        self.database = database

    @storage_fallback(False)
    def add_notification(self, user_id: int, message: str) -> bool:
        """Append a message to the user's log.

        The append is done by one UPDATE so concurrent appends do not
        overwrite each other.

        Returns:
            True if the user exists.
        """
        current = func.coalesce(UserModel.notifications, "", type_=Text)
        appended = case(
            (current == "", message),
            else_=current + NOTIFICATION_SEPARATOR + message,
        )
        with self.database.session() as db:
            updated = (
                db.query(UserModel)
                .filter(UserModel.id == user_id)
                .update({UserModel.notifications: appended}, synchronize_session=False)
            )
            db.commit()
        return updated > 0

    @storage_fallback(None)
    def get_notifications(self, user_id: int) -> Optional[str]:
        """Return the raw log, "" when empty, None when the user is unknown."""
        with self.database.session() as db:
            row = (
                db.query(UserModel.notifications)
                .filter(UserModel.id == user_id)
                .first()
            )
        if row is None:
            return None
        return row.notifications or ""

    def get_notification_lines(self, user_id: int) -> List[str]:
        return split_lines(self.get_notifications(user_id))

    def count_notifications(self, user_id: int) -> Optional[int]:
        """Return the number of messages, or None when the user is unknown."""
        text = self.get_notifications(user_id)
        if text is None:
            return None
        return len(split_lines(text))

    @storage_fallback(False)
    def delete_notification_line(self, user_id: int, substring: str) -> bool:
        """Remove the first message containing ``substring``.

        The rewrite only applies if the log is unchanged since it was read;
        a concurrent append makes this call return False.

        Returns:
            False if the log is empty, nothing matched or the log changed.
        """
        with self.database.session() as db:
            row = (
                db.query(UserModel.notifications)
                .filter(UserModel.id == user_id)
                .first()
            )
            if row is None or not row.notifications:
                return False

            lines = split_lines(row.notifications)
            for index, line in enumerate(lines):
                if substring in line:
                    del lines[index]
                    break
            else:
                return False

            updated = (
                db.query(UserModel)
                .filter(
                    UserModel.id == user_id,
                    UserModel.notifications == row.notifications,
                )
                .update(
                    {UserModel.notifications: join_lines(lines)},
                    synchronize_session=False,
                )
            )
            db.commit()
        return updated > 0

    @storage_fallback(False)
    def clear_notifications(self, user_id: int) -> bool:
        with self.database.session() as db:
            updated = (
                db.query(UserModel)
                .filter(UserModel.id == user_id)
                .update({UserModel.notifications: ""}, synchronize_session=False)
            )
            db.commit()
        return updated > 0

    @storage_fallback(False)
    def add_notification_to_all_instructors(self, message: str) -> bool:
        """Append a message to every user whose role is exactly ``Instructor``.

        Returns:
            True if at least one instructor received it.
        """
        with self.database.session() as db:
            instructor_ids = [
                row.id
                for row in db.query(UserModel.id).filter(UserModel.role == INSTRUCTOR_ROLE)
            ]
        if not instructor_ids:
            logger.info("No instructors to notify")
            return False

        delivered = [self.add_notification(user_id, message) for user_id in instructor_ids]
        logger.info("Notified %d of %d instructors", sum(delivered), len(instructor_ids))
        return any(delivered)
