"""Invitation code database model.

This module defines the InvitationCode database model using SQLAlchemy.
"""

from sqlalchemy import Boolean, Column, String, false
from .base import Base


class InvitationCodeModel(Base):
    """Invitation code database model."""

    __tablename__ = "invitation_codes"

    code = Column(String(10), primary_key=True, index=True)
    role = Column(String(200), nullable=False)  # role granted on redemption
    is_used = Column(Boolean, nullable=False, default=False, server_default=false())
