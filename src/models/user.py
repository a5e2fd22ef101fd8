"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from sqlalchemy import Boolean, Column, Integer, String, Text, false
from .base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_name = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(200), nullable=False)  # free text, e.g. 'Student, Reviewer'
    notifications = Column(Text, nullable=False, default="")  # newline-delimited log
    forgot_password = Column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self):
        return f"<User {self.user_name} ({self.role})>"
