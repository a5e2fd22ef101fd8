from .base import Base
from .user import UserModel
from .invitation_code import InvitationCodeModel
from .reviewer_rating import ReviewerRatingModel

__all__ = ["Base", "UserModel", "InvitationCodeModel", "ReviewerRatingModel"]
