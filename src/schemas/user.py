"""User schema definitions.

This module defines the User data model handed between the store and its
callers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    id: Optional[int] = Field(
        default=None,
        description="Surrogate key assigned by the database on insert.",
    )
    user_name: str = Field(description="Unique login name.")
    password: str = Field(description="Login password.")
    role: str = Field(
        description="Free-text role, may name several roles, e.g. 'Student, Reviewer'."
    )
    notifications: Optional[str] = Field(
        default="",
        description="Newline-delimited notification log; None is stored as empty.",
    )
    forgot_password: bool = Field(
        default=False,
        description="Set while the user waits for a password reset.",
    )
