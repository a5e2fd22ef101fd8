"""Data store facade.

``DataStore`` owns one database handle and the managers that operate on it.
Callers open it explicitly and close it when done::

    with DataStore("sqlite:///review_hub.db") as store:
        store.users.register(User(user_name="alice", password="pw", role="admin"))

Account rules and text renderings for the display layer live beside the
managers in ``utils.credentials`` and ``utils.display``.
"""

import logging
from typing import Optional

from config import DATABASE_ECHO
from core.database import Database
from utils.invitation_manager import InvitationManager
from utils.notification_manager import NotificationManager
from utils.rating_manager import RatingManager
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


class DataStore:
    """All persistent state of the review application behind one handle.

    Attributes:
        database: The underlying engine/session holder.
        users: User account operations.
        notifications: Per-user notification log operations.
        invitations: Invitation code operations.
        ratings: Reviewer rating and trust operations.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = DATABASE_ECHO):
        self.database = Database(url, echo=echo)
        self.users = UserManager(self.database)
        self.notifications = NotificationManager(self.database)
        self.invitations = InvitationManager(self.database)
        self.ratings = RatingManager(self.database, self.users, self.notifications)

    def connect(self) -> "DataStore":
        """Open the database and create missing tables.

        Raises:
            StorageUnavailableError: If the database cannot be opened.
        """
        self.database.connect()
        return self

    def close(self) -> None:
        self.database.close()

    def is_empty(self) -> bool:
        return self.users.is_empty()

    def __enter__(self) -> "DataStore":
        return self.connect()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
