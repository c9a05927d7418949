"""SQLAlchemy-backed user repository adapter."""

from typing import Optional

from sqlalchemy.orm import Session

from app.application.ports.user_repository import UserRepository
from app.domain.entities.user import Role, User, UserStatus

from .models import UserModel


class SqlAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of user lookups."""

    def __init__(self, session: Session) -> None:
        self._session = session

    async def get(self, user_id: str) -> Optional[User]:
        model = self._session.get(UserModel, user_id)
        if model is None:
            return None
        return User(
            id=model.id,
            name=model.name,
            role=Role(model.role),
            status=UserStatus(model.status),
        )
