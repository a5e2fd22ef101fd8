"""Invitation code utilities.

Invitation codes are short single-use tokens that grant a role when a new
account is set up.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import INVITATION_CODE_LENGTH
from core.database import Database, storage_fallback
from core.exceptions import DuplicateKeyError, StorageUnavailableError
from models.invitation_code import InvitationCodeModel
from schemas.invitation import InvitationCode
from utils.converters import model_to_invitation

logger = logging.getLogger(__name__)


class InvitationManager:
    """Generates, looks up and redeems invitation codes."""

    def __init__(self, database: Database):
        self.database = database

    def generate_code(self, role: str) -> str:
        """Generate and store a new unused invitation code for ``role``.

        The code is the head of a random UUID. Existing codes are not checked
        first; a collision surfaces as DuplicateKeyError.

        Raises:
            DuplicateKeyError: If the generated code already exists.
            StorageUnavailableError: If the insert fails for another reason.
        """
        code = str(uuid.uuid4())[:INVITATION_CODE_LENGTH]
        try:
            with self.database.session() as db:
                db.add(InvitationCodeModel(code=code, role=role, is_used=False))
                db.commit()
        except IntegrityError as e:
            raise DuplicateKeyError(InvitationCodeModel.__tablename__, code) from e
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Cannot store invitation code: {e}") from e

        logger.info("Generated invitation code for role: %s", role)
        return code

    @storage_fallback(None)
    def get_role_for_code(self, code: str) -> Optional[str]:
        with self.database.session() as db:
            row = (
                db.query(InvitationCodeModel.role)
                .filter(InvitationCodeModel.code == code)
                .first()
            )
        return row.role if row else None

    @storage_fallback(False)
    def validate_and_consume(self, code: str) -> bool:
        """Redeem a code.

        Check and mark happen in one conditional UPDATE, so of several
        concurrent redemptions of the same code only one succeeds.

        Returns:
            True if the code existed and was unused; it is now used.
        """
        with self.database.session() as db:
            updated = (
                db.query(InvitationCodeModel)
                .filter(
                    InvitationCodeModel.code == code,
                    InvitationCodeModel.is_used.is_(False),
                )
                .update({InvitationCodeModel.is_used: True}, synchronize_session=False)
            )
            db.commit()
        if updated:
            logger.info("Invitation code redeemed: %s", code)
        return updated == 1

    @storage_fallback(None)
    def mark_used(self, code: str) -> None:
        """Mark a code as used. Unknown codes are ignored."""
        with self.database.session() as db:
            db.query(InvitationCodeModel).filter(InvitationCodeModel.code == code).update(
                {InvitationCodeModel.is_used: True}, synchronize_session=False
            )
            db.commit()

    @storage_fallback(list)
    def list_codes(self, role: Optional[str] = None) -> List[InvitationCode]:
        """List invitation codes, optionally only those granting ``role``."""
        with self.database.session() as db:
            query = db.query(InvitationCodeModel)
            if role:
                query = query.filter(InvitationCodeModel.role == role)
            return [model_to_invitation(m) for m in query.order_by(InvitationCodeModel.code).all()]
