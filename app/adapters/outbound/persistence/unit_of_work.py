"""SQLAlchemy unit of work adapter."""

from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.ports.unit_of_work import UnitOfWork
from app.domain.errors import StorageError
from app.infrastructure.config.settings import settings
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .campaign_repository import SqlAlchemyCampaignRepository
from .disposition_catalog_repository import SqlAlchemyDispositionCatalogRepository
from .lead_pool_repository import SqlAlchemyLeadPoolRepository
from .lead_repository import SqlAlchemyLeadRepository
from .reference_data_repository import SqlAlchemyReferenceDataRepository
from .user_repository import SqlAlchemyUserRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One SQLAlchemy session, one transaction."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        """
        Initialize unit of work.

        Args:
            session_factory: Callable returning a new Session (defaults to get_db_session)
        """
        self._session_factory = session_factory or get_db_session
        self._session: Optional[Session] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.leads = SqlAlchemyLeadRepository(
            self._session, chunk_size=settings.duplicate_check_chunk_size
        )
        self.campaigns = SqlAlchemyCampaignRepository(self._session)
        self.pools = SqlAlchemyLeadPoolRepository(self._session)
        self.dispositions = SqlAlchemyDispositionCatalogRepository(self._session)
        self.reference_data = SqlAlchemyReferenceDataRepository(self._session)
        self.users = SqlAlchemyUserRepository(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.rollback()
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Database error, transaction rolled back: {str(exc)}")
            raise StorageError() from exc

    async def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Database error while committing transaction: {str(e)}")
            raise StorageError() from e

    async def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()
