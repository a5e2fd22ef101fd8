"""Reviewer rating and trust utilities.

Students rate reviewers and may flag some of them as trusted. Ratings are
keyed by the (reviewer, student) user-name pair.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from config import TRUSTED_REVIEWER_MESSAGE
from core.database import Database, storage_fallback
from models.reviewer_rating import ReviewerRatingModel, utc_now
from schemas.rating import ReviewerRating
from utils.converters import model_to_rating
from utils.notification_manager import NotificationManager
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


def _pair(reviewer: str, student: str):
    return (
        ReviewerRatingModel.reviewer_username == reviewer,
        ReviewerRatingModel.student_username == student,
    )


class RatingManager:
    """Manages reviewer ratings and the trusted-reviewer flag."""

    def __init__(
        self,
        database: Database,
        users: UserManager,
        notifications: NotificationManager,
    ):
        """Initialize RatingManager.

        Args:
            database: Database handle shared with the other managers.
            users: Used to resolve reviewer ids for notifications.
            notifications: Used to tell reviewers they became trusted.
        """
        self.database = database
        self.users = users
        self.notifications = notifications

    @storage_fallback(False)
    def add_or_update_rating(self, reviewer: str, rating: int, student: str) -> bool:
        """Store a student's rating of a reviewer.

        An existing row gets the new rating and a fresh timestamp; otherwise
        an untrusted row is inserted. If another writer inserts the same pair
        first, the unique constraint rejects our insert and we update theirs.

        Returns:
            True once the rating is stored.
        """
        values = {
            ReviewerRatingModel.rating: rating,
            ReviewerRatingModel.timestamp: utc_now(),
        }
        with self.database.session() as db:
            updated = (
                db.query(ReviewerRatingModel)
                .filter(*_pair(reviewer, student))
                .update(values, synchronize_session=False)
            )
            if updated:
                db.commit()
                return True

            db.add(
                ReviewerRatingModel(
                    reviewer_username=reviewer,
                    rating=rating,
                    student_username=student,
                    trusted=False,
                )
            )
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                db.query(ReviewerRatingModel).filter(*_pair(reviewer, student)).update(
                    values, synchronize_session=False
                )
                db.commit()
        logger.info("Stored rating %s by %s for reviewer %s", rating, student, reviewer)
        return True

    @storage_fallback(False)
    def rating_exists(self, reviewer: str, student: str) -> bool:
        with self.database.session() as db:
            return (
                db.query(ReviewerRatingModel.id).filter(*_pair(reviewer, student)).first()
                is not None
            )

    @storage_fallback(None)
    def get_rating(self, student: str, reviewer: str) -> Optional[int]:
        """Return the rating ``student`` gave ``reviewer``, or None."""
        with self.database.session() as db:
            row = (
                db.query(ReviewerRatingModel.rating)
                .filter(*_pair(reviewer, student))
                .first()
            )
        return row.rating if row else None

    @storage_fallback(None)
    def get_rating_record(self, reviewer: str, student: str) -> Optional[ReviewerRating]:
        with self.database.session() as db:
            model = db.query(ReviewerRatingModel).filter(*_pair(reviewer, student)).first()
            return model_to_rating(model) if model else None

    @storage_fallback(False)
    def set_trusted(self, reviewer: str, student: str) -> bool:
        """Flag ``reviewer`` as trusted by ``student`` and notify the reviewer.

        Nothing happens when the student has not rated the reviewer. A
        reviewer without an account is flagged but not notified.

        Returns:
            True if a rating row was flagged.
        """
        if not self._set_trusted_flag(reviewer, student, True):
            return False

        logger.info("%s now trusts reviewer %s", student, reviewer)
        reviewer_id = self.users.get_user_id(reviewer)
        if reviewer_id is not None:
            self.notifications.add_notification(
                reviewer_id, TRUSTED_REVIEWER_MESSAGE.format(student=student)
            )
        return True

    @storage_fallback(False)
    def unset_trusted(self, reviewer: str, student: str) -> bool:
        updated = self._set_trusted_flag(reviewer, student, False)
        if updated:
            logger.info("%s no longer trusts reviewer %s", student, reviewer)
        return updated

    @storage_fallback(list)
    def get_trusted_reviewers(self, student: str) -> List[str]:
        """Return the distinct reviewers ``student`` trusts, alphabetically."""
        with self.database.session() as db:
            rows = (
                db.query(ReviewerRatingModel.reviewer_username)
                .filter(
                    ReviewerRatingModel.student_username == student,
                    ReviewerRatingModel.trusted.is_(True),
                )
                .distinct()
                .order_by(ReviewerRatingModel.reviewer_username)
                .all()
            )
        return [row.reviewer_username for row in rows]

    @storage_fallback(False)
    def is_trusted(self, reviewer: str, student: str) -> bool:
        with self.database.session() as db:
            row = (
                db.query(ReviewerRatingModel.trusted)
                .filter(*_pair(reviewer, student))
                .first()
            )
        return bool(row.trusted) if row else False

    def _set_trusted_flag(self, reviewer: str, student: str, trusted: bool) -> bool:
        with self.database.session() as db:
            updated = (
                db.query(ReviewerRatingModel)
                .filter(*_pair(reviewer, student))
                .update({ReviewerRatingModel.trusted: trusted}, synchronize_session=False)
            )
            db.commit()
        return updated > 0
