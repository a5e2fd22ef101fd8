"""Plain-text renderings handed to the display layer."""

from typing import Iterable, Optional

from schemas.user import User

USER_SEPARATOR = "-----------------------------"


def format_user_listing(users: Iterable[User]) -> str:
    """Render users as ``ID`` / ``Username`` / ``Role`` blocks."""
    blocks = []
    for user in users:
        blocks.append(
            f"ID: {user.id}\n"
            f"Username: {user.user_name}\n"
            f"Role: {user.role}\n"
            f"{USER_SEPARATOR}\n"
        )
    return "".join(blocks)


def format_notifications(notifications: Optional[str]) -> str:
    return notifications or ""
