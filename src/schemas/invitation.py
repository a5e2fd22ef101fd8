"""Invitation code schema definitions."""

from pydantic import BaseModel, Field


class InvitationCode(BaseModel):
    code: str = Field(description="Short single-use token.")
    role: str = Field(description="Role granted when the code is redeemed.")
    is_used: bool = Field(default=False, description="True once redeemed.")
