"""Reviewer rating schema definitions."""

from datetime import datetime

from pydantic import BaseModel, Field


class ReviewerRating(BaseModel):
    id: int
    reviewer_username: str
    rating: int
    student_username: str
    trusted: bool = Field(
        default=False,
        description="Whether the student lists this reviewer as trusted.",
    )
    timestamp: datetime = Field(description="Creation or last update time.")
