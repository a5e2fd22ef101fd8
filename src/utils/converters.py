"""Conversions between SQLAlchemy models and pydantic schemas."""

from models.invitation_code import InvitationCodeModel
from models.reviewer_rating import ReviewerRatingModel
from models.user import UserModel
from schemas.invitation import InvitationCode
from schemas.rating import ReviewerRating
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_name=user.user_name,
        password=user.password,
        role=user.role,
        notifications=user.notifications or "",
        forgot_password=user.forgot_password,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        user_name=model.user_name,
        password=model.password,
        role=model.role,
        notifications=model.notifications or "",
        forgot_password=bool(model.forgot_password),
    )


def model_to_invitation(model: InvitationCodeModel) -> InvitationCode:
    return InvitationCode(code=model.code, role=model.role, is_used=bool(model.is_used))


def model_to_rating(model: ReviewerRatingModel) -> ReviewerRating:
    return ReviewerRating(
        id=model.id,
        reviewer_username=model.reviewer_username,
        rating=model.rating,
        student_username=model.student_username,
        trusted=bool(model.trusted),
        timestamp=model.timestamp,
    )
