"""User repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.user import User


class UserRepository(ABC):
    """Port interface for user lookups."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        pass
