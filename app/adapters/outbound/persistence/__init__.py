"""SQLAlchemy persistence adapters."""

from app.adapters.outbound.persistence.models import Base
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "Base",
    "SqlAlchemyUnitOfWork",
]
