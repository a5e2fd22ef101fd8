from datetime import datetime

import pytz
from sqlalchemy import Boolean, Column, DateTime, Integer, String, UniqueConstraint, false

from .base import Base


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


class ReviewerRatingModel(Base):
    __tablename__ = "reviewer_ratings"
    __table_args__ = (
        UniqueConstraint(
            "reviewer_username",
            "student_username",
            name="uq_reviewer_ratings_reviewer_student",
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # Usernames, not foreign keys: ratings outlive removed users
    reviewer_username = Column(String(255), index=True, nullable=False)
    rating = Column(Integer, nullable=False)
    student_username = Column(String(255), index=True, nullable=False)
    trusted = Column(Boolean, nullable=False, default=False, server_default=false())
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now)
